"""Pure operations over tasks and task collections.

Every function here returns new values and leaves its arguments untouched.
The collection itself belongs to the caller (see ``TaskBoard``); nothing in
this module keeps state between calls.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union
from uuid import uuid4

from pydantic import BaseModel

from ..models.task import Task, TaskPriority, TaskStats, TaskStatus
from ..schemas import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500

PRIORITY_RANK: Dict[str, int] = {
    TaskPriority.HIGH.value: 3,
    TaskPriority.MEDIUM.value: 2,
    TaskPriority.LOW.value: 1,
}

VALID_PRIORITIES = frozenset(p.value for p in TaskPriority)
VALID_STATUSES = frozenset(s.value for s in TaskStatus)

# Fields an update may never touch.
IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


def new_task_id() -> str:
    """Default id factory (random UUID4, drawn from the OS CSPRNG)."""
    return str(uuid4())


def format_timestamp(moment: datetime) -> str:
    """Render a datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.

    Naive datetimes are taken to be UTC already.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _text(value: Any) -> Optional[str]:
    """Return ``value`` if it is a string, else None."""
    return value if isinstance(value, str) else None


def _payload(data: Union[BaseModel, Mapping[str, Any]], exclude_unset: bool = False) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_unset=exclude_unset)
    return dict(data)


def _field_name(key: str) -> Optional[str]:
    """Map a snake_case or camelCase key to a Task field name."""
    if key in Task.model_fields:
        return key
    for name, field in Task.model_fields.items():
        if field.alias == key:
            return name
    return None


def create_task(
    data: Union[TaskCreate, Mapping[str, Any]],
    *,
    clock: Optional[Clock] = None,
    id_factory: Optional[IdFactory] = None,
) -> Task:
    """Create a new task from a creation payload.

    Args:
        data: Title, description, priority and status of the new task
        clock: Returns the current time; defaults to UTC now
        id_factory: Returns a fresh id; defaults to a random UUID

    Returns:
        Task with a fresh id and ``created_at == updated_at``

    No validation is performed; call ``validate_task`` first.
    """
    payload = _payload(data)
    now = format_timestamp((clock or utc_now)())

    task = Task.model_construct(
        id=(id_factory or new_task_id)(),
        title=payload.get("title"),
        description=payload.get("description", ""),
        priority=_plain(payload.get("priority", TaskPriority.MEDIUM.value)),
        status=_plain(payload.get("status", TaskStatus.TODO.value)),
        created_at=now,
        updated_at=now,
    )

    logger.debug(f"Created task {task.id}: {task.title}")
    return task


def update_task(
    task: Task,
    updates: Union[TaskUpdate, Mapping[str, Any]],
    *,
    clock: Optional[Clock] = None,
) -> Task:
    """Return a copy of ``task`` with ``updates`` merged in and re-stamped.

    Args:
        task: Existing task; left unmodified
        updates: Partial field overrides (snake_case or camelCase keys)
        clock: Returns the current time; defaults to UTC now

    Returns:
        Updated task

    ``id`` and ``created_at`` in ``updates`` are ignored, and ``updated_at``
    is always replaced by the clock, even when nothing else changed.
    """
    changes: Dict[str, Any] = {}

    for key, value in _payload(updates, exclude_unset=True).items():
        name = _field_name(key)
        if name is None:
            logger.debug(f"Ignoring unknown task field in update: {key}")
            continue
        if name in IMMUTABLE_FIELDS:
            logger.debug(f"Ignoring attempt to change {name} of task {task.id}")
            continue
        changes[name] = _plain(value)

    changes["updated_at"] = format_timestamp((clock or utc_now)())

    updated = task.model_copy(update=changes)
    logger.debug(f"Updated task {task.id}: {sorted(changes)}")
    return updated


def validate_task(candidate: Union[BaseModel, Mapping[str, Any]]) -> List[str]:
    """Check a (possibly partial) task payload.

    Args:
        candidate: Mapping or model with any of title, description,
            priority and status

    Returns:
        Human-readable error messages; empty when the payload is valid

    Every rule is checked; errors are accumulated, never raised. The length
    limit on the title applies to the raw title, while the required check
    applies to the trimmed one. A title that is not a string counts as
    missing.
    """
    if isinstance(candidate, BaseModel):
        fields = {
            name: getattr(candidate, name, None)
            for name in ("title", "description", "priority", "status")
        }
    else:
        fields = dict(candidate)
    errors: List[str] = []

    title = _text(fields.get("title"))
    if not title or len(title.strip()) == 0:
        errors.append("Task title is required")

    if title and len(title) > TITLE_MAX_LENGTH:
        errors.append(f"Task title must be less than {TITLE_MAX_LENGTH} characters")

    description = _text(fields.get("description"))
    if description and len(description) > DESCRIPTION_MAX_LENGTH:
        errors.append(f"Task description must be less than {DESCRIPTION_MAX_LENGTH} characters")

    priority = _plain(fields.get("priority"))
    if priority and _text(priority) not in VALID_PRIORITIES:
        errors.append("Invalid task priority")

    status = _plain(fields.get("status"))
    if status and _text(status) not in VALID_STATUSES:
        errors.append("Invalid task status")

    return errors


def sort_tasks_by_priority(tasks: Iterable[Task]) -> List[Task]:
    """Return tasks ordered high, medium, low; ties keep their input order.

    A priority that is missing or not a known string ranks after low.
    """
    return sorted(
        tasks,
        key=lambda t: PRIORITY_RANK.get(_text(getattr(t, "priority", None)), 0),
        reverse=True,
    )


def filter_tasks_by_status(tasks: Iterable[Task], status: Union[TaskStatus, str]) -> List[Task]:
    """Return the tasks with the given status, in input order."""
    status = _plain(status)
    return [task for task in tasks if getattr(task, "status", None) == status]


def get_task_stats(tasks: Iterable[Task]) -> TaskStats:
    """Count tasks by status and priority and compute the completion rate.

    Args:
        tasks: Task collection

    Returns:
        Statistics; ``completion_rate`` is a percentage, 0 for no tasks
    """
    status_counts = {status.value: 0 for status in TaskStatus}
    priority_counts = {priority.value: 0 for priority in TaskPriority}
    total = 0

    for task in tasks:
        total += 1
        status = _text(getattr(task, "status", None))
        if status in status_counts:
            status_counts[status] += 1
        priority = _text(getattr(task, "priority", None))
        if priority in priority_counts:
            priority_counts[priority] += 1

    completed = status_counts[TaskStatus.DONE.value]
    completion_rate = (completed / total) * 100 if total > 0 else 0

    return TaskStats(
        total=total,
        completed=completed,
        in_progress=status_counts[TaskStatus.IN_PROGRESS.value],
        todo=status_counts[TaskStatus.TODO.value],
        high_priority=priority_counts[TaskPriority.HIGH.value],
        medium_priority=priority_counts[TaskPriority.MEDIUM.value],
        low_priority=priority_counts[TaskPriority.LOW.value],
        completion_rate=completion_rate,
    )


def find_task(tasks: Iterable[Task], task_id: str) -> Optional[Task]:
    """Return the task with ``task_id``, or None."""
    for task in tasks:
        if getattr(task, "id", None) == task_id:
            return task
    return None


def remove_task(tasks: Iterable[Task], task_id: str) -> List[Task]:
    """Return a new list without the task with ``task_id``."""
    return [task for task in tasks if getattr(task, "id", None) != task_id]


def replace_task(tasks: Iterable[Task], replacement: Task) -> List[Task]:
    """Return a new list with the task sharing ``replacement.id`` swapped in place."""
    return [replacement if getattr(task, "id", None) == replacement.id else task for task in tasks]
