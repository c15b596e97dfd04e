"""Persistence adapter storing the whole task collection under one key."""

import json
import logging
from typing import Iterable, List, Mapping, Optional

from ..models.task import Task
from ..stores import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "taskeasy-tasks"


class TaskStorage:
    """Load, save and clear the task collection in a key-value store.

    The adapter never raises. Without a store every call is a no-op, and read
    or write failures are logged and turned into "nothing stored".
    """

    def __init__(self, store: Optional[KeyValueStore] = None, key: str = STORAGE_KEY):
        """Initialize the adapter.

        Args:
            store: Storage capability; None when the environment has none
            key: Slot holding the serialized collection
        """
        self.store = store
        self.key = key
        if store is None:
            logger.info("No key-value store available; task persistence disabled")

    @property
    def available(self) -> bool:
        """Whether a store is attached."""
        return self.store is not None

    def load_tasks(self) -> List[Task]:
        """Load the stored collection.

        Returns:
            Stored tasks in stored order, or an empty list when there is no
            store, nothing stored, or the stored value cannot be decoded.
            Entries that are not objects are returned unchanged so that a
            later save writes them back.
        """
        if self.store is None:
            logger.debug("No store available, returning empty task list")
            return []

        try:
            stored = self.store.get(self.key)
        except Exception as e:
            logger.error(f"Error reading tasks from store: {str(e)}")
            return []

        if not stored:
            logger.debug(f"No stored tasks under '{self.key}'")
            return []

        try:
            data = json.loads(stored)
        except (TypeError, ValueError) as e:
            logger.error(f"Error loading tasks from store: {str(e)}")
            return []

        if not isinstance(data, list):
            logger.error(f"Stored tasks under '{self.key}' are not a list: {type(data).__name__}")
            return []

        tasks = []
        for item in data:
            if isinstance(item, Mapping):
                tasks.append(Task.from_wire(item))
            else:
                logger.warning(f"Stored task entry is not an object, keeping it as is: {item!r}")
                tasks.append(item)

        logger.debug(f"Loaded {len(tasks)} tasks from '{self.key}'")
        return tasks

    def save_tasks(self, tasks: Iterable[Task]) -> None:
        """Overwrite the stored collection with ``tasks``.

        Failures are logged; the caller is not informed.
        """
        if self.store is None:
            return

        try:
            payload = json.dumps(
                [task.to_wire() if isinstance(task, Task) else task for task in tasks],
                ensure_ascii=False,
                separators=(",", ":"),
            )
            self.store.set(self.key, payload)
            logger.debug(f"Saved tasks to '{self.key}' ({len(payload)} characters)")
        except Exception as e:
            logger.error(f"Error saving tasks to store: {str(e)}")

    def clear_tasks(self) -> None:
        """Remove the stored collection."""
        if self.store is None:
            return

        try:
            self.store.remove(self.key)
            logger.info(f"Cleared stored tasks under '{self.key}'")
        except Exception as e:
            logger.error(f"Error clearing tasks from store: {str(e)}")
