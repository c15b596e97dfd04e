"""Shared test fixtures and configuration for the test suite."""

import itertools
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, List

import pytest

# Add the parent directory to the path for imports
import sys

sys.path.append(str(Path(__file__).parent.parent))

from taskeasy.config import Settings
from taskeasy.models.task import Task
from taskeasy.services.storage import TaskStorage
from taskeasy.stores import MemoryStore

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class TickingClock:
    """Clock that advances one second on every call."""

    def __init__(self, start: datetime = BASE_TIME, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step
        self.calls = 0

    def __call__(self) -> datetime:
        moment = self.current
        self.current += self.step
        self.calls += 1
        return moment


@pytest.fixture
def clock() -> TickingClock:
    """Deterministic clock starting at 2024-01-01T00:00:00Z."""
    return TickingClock()


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Sequential id factory: task-1, task-2, ..."""
    counter = itertools.count(1)
    return lambda: f"task-{next(counter)}"


@pytest.fixture
def sample_tasks() -> List[Task]:
    """Three tasks covering every priority and status."""
    return [
        Task(
            id="1",
            title="High Priority Task",
            description="Important task",
            priority="high",
            status="to-do",
            created_at="2024-01-01T00:00:00.000Z",
            updated_at="2024-01-01T00:00:00.000Z",
        ),
        Task(
            id="2",
            title="Medium Priority Task",
            description="Medium task",
            priority="medium",
            status="in-progress",
            created_at="2024-01-01T00:00:00.000Z",
            updated_at="2024-01-01T00:00:00.000Z",
        ),
        Task(
            id="3",
            title="Low Priority Task",
            description="Low task",
            priority="low",
            status="done",
            created_at="2024-01-01T00:00:00.000Z",
            updated_at="2024-01-01T00:00:00.000Z",
        ),
    ]


@pytest.fixture
def sample_task_data():
    """Sample task creation payload."""
    return {
        "title": "New Task",
        "description": "Task description",
        "priority": "high",
        "status": "to-do",
    }


@pytest.fixture
def memory_store() -> MemoryStore:
    """Empty in-memory key-value store."""
    return MemoryStore()


@pytest.fixture
def task_storage(memory_store) -> TaskStorage:
    """Persistence adapter over the in-memory store."""
    return TaskStorage(memory_store)


@pytest.fixture
def test_settings(tmp_path, monkeypatch) -> Settings:
    """Settings pointing every directory into a temporary path."""
    monkeypatch.chdir(tmp_path)
    return Settings(
        storage_backend="file",
        storage_dir=tmp_path / "data",
        log_dir=tmp_path / "logs",
        log_level="DEBUG",
        environment="test",
    )
