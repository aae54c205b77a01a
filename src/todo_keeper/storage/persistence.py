"""Persistence adapter: the task collection as JSON text under one key."""

from __future__ import annotations

import json
from typing import Any, Iterable

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..constants import STORAGE_KEY
from ..task_engine.model import Task
from .kv import KeyValueStore


class TaskRecord(BaseModel):
    """Persisted shape of a single task."""

    id: str
    text: str
    done: bool = False
    created_at: int = Field(default=0, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_task(self) -> Task:
        return Task(id=self.id, text=self.text, done=self.done, created_at=self.created_at)


def dump_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)


def parse_tasks(text: str) -> list[Task]:
    """Parse persisted text into tasks.

    Raises ``ValueError`` (``json.JSONDecodeError`` or pydantic
    ``ValidationError``) when the text is not a list of task records, and
    ``RecursionError`` when it nests too deeply to decode.
    """
    raw: Any = json.loads(text)
    if not isinstance(raw, list):
        raise ValueError(f"expected a list of tasks, got {type(raw).__name__}")
    return [TaskRecord.model_validate(item).to_task() for item in raw]


class PersistenceAdapter:
    def __init__(self, kv: KeyValueStore, key: str = STORAGE_KEY) -> None:
        self._kv = kv
        self.key = key

    def save(self, tasks: Iterable[Task]) -> None:
        """Overwrite the stored collection.  Storage failures propagate."""
        self._kv.set(self.key, dump_tasks(tasks))

    def restore(self) -> list[Task]:
        text = self._kv.get(self.key)
        if text is None:
            return []
        try:
            return parse_tasks(text)
        except (ValueError, ValidationError, RecursionError) as exc:
            logger.warning("Discarding unparseable task list under {!r}: {}", self.key, exc)
            return []
