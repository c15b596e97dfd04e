"""TaskEasy core: task model, pure task operations and persistence."""

from .models.task import Task, TaskPriority, TaskStats, TaskStatus
from .schemas import TaskCreate, TaskUpdate
from .services.storage import STORAGE_KEY, TaskStorage
from .services.task_board import TaskBoard, TaskNotFoundError, TaskValidationError
from .services.task_operations import (
    create_task,
    filter_tasks_by_status,
    get_task_stats,
    sort_tasks_by_priority,
    update_task,
    validate_task,
)
from .stores import FileStore, KeyValueStore, MemoryStore, StoreError, StoreQuotaExceededError

__version__ = "1.0.0"

__all__ = [
    "STORAGE_KEY",
    "FileStore",
    "KeyValueStore",
    "MemoryStore",
    "StoreError",
    "StoreQuotaExceededError",
    "Task",
    "TaskBoard",
    "TaskCreate",
    "TaskNotFoundError",
    "TaskPriority",
    "TaskStats",
    "TaskStatus",
    "TaskStorage",
    "TaskUpdate",
    "TaskValidationError",
    "create_task",
    "filter_tasks_by_status",
    "get_task_stats",
    "sort_tasks_by_priority",
    "update_task",
    "validate_task",
]
