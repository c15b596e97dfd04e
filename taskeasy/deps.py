"""Factories wiring settings into stores and the persistence adapter."""

import logging
from functools import lru_cache
from typing import Optional

from .config import Settings, settings
from .services.storage import TaskStorage
from .stores import FileStore, KeyValueStore, MemoryStore

logger = logging.getLogger(__name__)


@lru_cache()
def get_settings() -> Settings:
    """Get application settings (cached)."""
    return settings


def get_store(settings: Settings) -> Optional[KeyValueStore]:
    """Get the key-value store selected by ``storage_backend``.

    Returns None for the ``none`` backend, which disables persistence.
    """
    if settings.storage_backend == "file":
        logger.debug(f"Using file store at {settings.storage_dir}")
        return FileStore(settings.storage_dir)
    if settings.storage_backend == "memory":
        logger.debug("Using in-memory store")
        return MemoryStore()
    return None


def get_task_storage(settings: Settings) -> TaskStorage:
    """Get a persistence adapter for the configured store and key."""
    return TaskStorage(get_store(settings), key=settings.storage_key)
