"""Domain models for the task tracker."""

from enum import Enum
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TaskPriority(str, Enum):
    """Task priority enumeration."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, Enum):
    """Task status enumeration."""
    TODO = "to-do"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class Task(BaseModel):
    """Task domain model.

    Field constraints (title and description length, enum membership) are
    checked by ``validate_task``, not here. Tasks are built with
    ``model_construct`` and ``model_copy`` so an invalid task can still be
    represented and reported on.

    Keys a stored record carries beyond the declared fields are kept as
    extras and written back unchanged.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str = Field(..., description="Unique task identifier")
    title: str = Field(..., description="Task title")
    description: str = Field(default="", description="Task description")
    priority: str = Field(default=TaskPriority.MEDIUM.value, description="Task priority")
    status: str = Field(default=TaskStatus.TODO.value, description="Task status")
    created_at: str = Field(..., description="ISO-8601 creation timestamp")
    updated_at: str = Field(..., description="ISO-8601 last update timestamp")

    def to_wire(self) -> dict:
        """Serialize to the camelCase mapping used for persistence.

        Only fields that were set are written, so a record loaded without a
        key is saved without it.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True, warnings=False)

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> "Task":
        """Build a task from a stored mapping without re-validating it.

        Accepts camelCase or snake_case keys. Absent fields read as their
        default (None for required ones) but stay unset; unknown keys
        become extras.
        """
        values: Dict[str, Any] = {}
        extra = dict(data)
        for name, field in cls.model_fields.items():
            if field.alias in extra:
                values[name] = extra.pop(field.alias)
            elif name in extra:
                values[name] = extra.pop(name)
        present = set(values) | set(extra)
        for name, field in cls.model_fields.items():
            if name not in values:
                values[name] = None if field.is_required() else field.get_default()
        return cls.model_construct(_fields_set=present, **values, **extra)


class TaskStats(BaseModel):
    """Aggregate counts over a task collection."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total: int = 0
    completed: int = 0
    in_progress: int = 0
    todo: int = 0
    high_priority: int = 0
    medium_priority: int = 0
    low_priority: int = 0
    completion_rate: float = 0
