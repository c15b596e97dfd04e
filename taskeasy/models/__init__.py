"""Domain models."""

from .task import Task, TaskPriority, TaskStats, TaskStatus

__all__ = ["Task", "TaskPriority", "TaskStats", "TaskStatus"]
