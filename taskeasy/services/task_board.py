"""Task board: owns the in-memory task collection and keeps it persisted."""

import logging
from typing import Any, List, Mapping, Optional, Union

from ..models.task import Task, TaskStats, TaskStatus
from ..schemas import TaskCreate, TaskUpdate
from .storage import TaskStorage
from .task_operations import (
    Clock,
    IdFactory,
    create_task,
    filter_tasks_by_status,
    find_task,
    get_task_stats,
    remove_task,
    replace_task,
    sort_tasks_by_priority,
    update_task,
    validate_task,
)

logger = logging.getLogger(__name__)


class TaskValidationError(ValueError):
    """Raised when a task payload fails validation."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class TaskNotFoundError(KeyError):
    """Raised when no task has the requested id."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(task_id)

    def __str__(self) -> str:
        return f"Task {self.task_id} not found"


class TaskBoard:
    """Load-mutate-save loop over a single task collection.

    The collection is loaded once at construction. Every change goes through
    the pure task operations, replaces the collection, and is written back
    through the storage adapter.
    """

    def __init__(
        self,
        storage: TaskStorage,
        *,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
    ):
        """Initialize the board.

        Args:
            storage: Persistence adapter
            clock: Time source passed to the task operations
            id_factory: Id source passed to ``create_task``
        """
        self._storage = storage
        self._clock = clock
        self._id_factory = id_factory
        self._tasks: List[Task] = storage.load_tasks()
        logger.info(f"Task board loaded with {len(self._tasks)} tasks")

    @property
    def tasks(self) -> List[Task]:
        """Copy of the current collection."""
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def _commit(self, tasks: List[Task]) -> None:
        self._tasks = tasks
        self._storage.save_tasks(self._tasks)

    def get_task(self, task_id: str) -> Optional[Task]:
        """Get a task by ID.

        Args:
            task_id: Task ID

        Returns:
            Task if found, None otherwise
        """
        return find_task(self._tasks, task_id)

    def add_task(self, data: Union[TaskCreate, Mapping[str, Any]]) -> Task:
        """Validate and add a new task.

        Args:
            data: Task creation payload

        Returns:
            Created task

        Raises:
            TaskValidationError: If the payload is invalid
        """
        errors = validate_task(data)
        if errors:
            logger.warning(f"Rejected new task: {errors}")
            raise TaskValidationError(errors)

        task = create_task(data, clock=self._clock, id_factory=self._id_factory)
        self._commit(self._tasks + [task])

        logger.info(f"Created task {task.id}: {task.title}")
        return task

    def edit_task(self, task_id: str, updates: Union[TaskUpdate, Mapping[str, Any]]) -> Task:
        """Apply partial updates to a task.

        Args:
            task_id: Task ID
            updates: Fields to change

        Returns:
            Updated task

        Raises:
            TaskNotFoundError: If no task has this ID
            TaskValidationError: If the updated task would be invalid
        """
        task = find_task(self._tasks, task_id)
        if task is None:
            logger.warning(f"Task {task_id} not found for update")
            raise TaskNotFoundError(task_id)

        updated = update_task(task, updates, clock=self._clock)
        errors = validate_task(updated)
        if errors:
            logger.warning(f"Rejected update of task {task_id}: {errors}")
            raise TaskValidationError(errors)

        self._commit(replace_task(self._tasks, updated))
        logger.info(f"Updated task {task_id}: {updated.title}")
        return updated

    def set_status(self, task_id: str, status: Union[TaskStatus, str]) -> Task:
        """Move a task to another status.

        Raises:
            TaskNotFoundError: If no task has this ID
            TaskValidationError: If the status is not a known status
        """
        return self.edit_task(task_id, {"status": status})

    def delete_task(self, task_id: str) -> bool:
        """Delete a task.

        Args:
            task_id: Task ID

        Returns:
            True if task was deleted, False if not found
        """
        remaining = remove_task(self._tasks, task_id)
        if len(remaining) == len(self._tasks):
            logger.warning(f"Task {task_id} not found for deletion")
            return False

        self._commit(remaining)
        logger.info(f"Deleted task {task_id}")
        return True

    def clear(self) -> int:
        """Delete every task and drop the stored collection.

        Returns:
            Number of tasks that were cleared
        """
        count = len(self._tasks)
        self._tasks = []
        self._storage.clear_tasks()
        logger.warning(f"Cleared all {count} tasks")
        return count

    def visible_tasks(self, status: Optional[Union[TaskStatus, str]] = None) -> List[Task]:
        """Tasks for display: optionally one status only, highest priority first."""
        tasks = self._tasks if status is None else filter_tasks_by_status(self._tasks, status)
        return sort_tasks_by_priority(tasks)

    def stats(self) -> TaskStats:
        """Statistics over the whole collection."""
        return get_task_stats(self._tasks)
