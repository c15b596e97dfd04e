"""Key-value store backends for task persistence.

A store holds text values under string keys. It is the Python stand-in for
the browser's local storage: the persistence adapter only ever needs
``get``, ``set`` and ``remove``.
"""

import logging
import re
from pathlib import Path
from typing import Dict, Optional, Protocol, Union, runtime_checkable

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class StoreError(Exception):
    """Base error raised by key-value stores."""


class StoreQuotaExceededError(StoreError):
    """Raised when a write would exceed the store's capacity."""


@runtime_checkable
class KeyValueStore(Protocol):
    """Storage capability handed to ``TaskStorage``."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class MemoryStore:
    """Dict-backed store.

    Args:
        max_size: Optional capacity in characters over all stored values
    """

    def __init__(self, max_size: Optional[int] = None):
        self._data: Dict[str, str] = {}
        self.max_size = max_size

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.max_size is not None:
            used = sum(len(v) for k, v in self._data.items() if k != key)
            if used + len(value) > self.max_size:
                raise StoreQuotaExceededError(
                    f"Writing {len(value)} characters to '{key}' exceeds quota of {self.max_size}"
                )
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __len__(self) -> int:
        return len(self._data)


class FileStore:
    """Store keeping one UTF-8 file per key in a directory.

    The directory is created on first write.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not key:
            raise StoreError("Store key cannot be empty")
        return self.directory / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)

        # Atomic replace.
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)
        logger.debug(f"Wrote {len(value)} characters to {path}")

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
