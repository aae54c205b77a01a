"""Local storage for the task list: key-value backends and the persistence adapter."""

from .kv import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore, StorageError
from .persistence import PersistenceAdapter

__all__ = [
    "FileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "PersistenceAdapter",
    "StorageError",
]
