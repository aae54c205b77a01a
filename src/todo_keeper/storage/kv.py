"""String key-value stores backing the task list.

``FileKeyValueStore`` is the local equivalent of browser ``localStorage``:
a flat JSON object of string keys to string values, kept in a single file
under the project state directory.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from loguru import logger

from ..io_utils import FileLock, _atomic_write_json


class StorageError(RuntimeError):
    """Raised when the key-value store cannot be read or written."""


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class FileKeyValueStore(KeyValueStore):
    """JSON-file-backed store; each access holds an exclusive file lock."""

    def __init__(self, path: Path, lock_path: Path) -> None:
        self._path = path
        self._lock = FileLock(lock_path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (ValueError, RecursionError) as exc:
            logger.warning("Ignoring unreadable storage file {}: {}", self._path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring storage file {}: expected object, got {}", self._path, type(raw).__name__)
            return {}
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        try:
            with self._lock:
                return self._read_all().get(key)
        except OSError as exc:
            raise StorageError(f"Failed to read {self._path.name}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            with self._lock:
                data = self._read_all()
                data[key] = value
                _atomic_write_json(self._path, data)
        except OSError as exc:
            raise StorageError(f"Failed to write {self._path.name}: {exc}") from exc
