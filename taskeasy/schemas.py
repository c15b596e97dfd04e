"""Input payload schemas for task creation and updates."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .models.task import TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    """Schema for creating a new task.

    Lengths are not constrained here; ``validate_task`` reports them.
    """
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(..., description="Task title")
    description: str = Field(default="", description="Task description")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Task priority")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Task status")


class TaskUpdate(BaseModel):
    """Schema for updating an existing task.

    Only fields that were explicitly set are applied.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    title: Optional[str] = Field(None, description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    priority: Optional[TaskPriority] = Field(None, description="Task priority")
    status: Optional[TaskStatus] = Field(None, description="Task status")
