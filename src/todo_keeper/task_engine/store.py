"""In-memory task store with explicit persistence.

The store is the only owner of the task collection.  Every mutating
operation changes the in-memory list first and then calls :meth:`persist`,
which hands the full collection to the :class:`PersistenceAdapter`.  Reads
return fresh tuples so callers never alias the internal list.
"""

from __future__ import annotations

from typing import Optional, Protocol, Union

from loguru import logger

from ..constants import CLEAR_ALL_MESSAGE
from ..storage.kv import StorageError
from ..storage.persistence import PersistenceAdapter
from ..utils import Clock, SystemClock
from .filters import FilterMode, apply_filter
from .model import Task, generate_id, normalize_text


class UserPrompt(Protocol):
    def confirm(self, message: str) -> bool:
        ...


class TaskStore:
    """Sole authority over the ordered (newest-first) task collection.

    Parameters
    ----------
    adapter:
        Persistence adapter used by :meth:`load` and :meth:`persist`.
    prompt:
        Confirmation gate consulted by :meth:`clear_all`.
    clock:
        Source of millisecond timestamps for ids and ``created_at``.
    """

    def __init__(
        self,
        adapter: PersistenceAdapter,
        prompt: UserPrompt,
        clock: Optional[Clock] = None,
    ) -> None:
        self._adapter = adapter
        self._prompt = prompt
        self._clock: Clock = clock or SystemClock()
        self._tasks: list[Task] = []
        self.last_persist_error: Optional[str] = None

    # -- loading / persistence -----------------------------------------------

    def load(self) -> tuple[Task, ...]:
        """Replace the collection with the persisted one; never raises."""
        try:
            restored = self._adapter.restore()
        except StorageError as exc:
            logger.warning("Could not read stored tasks, starting empty: {}", exc)
            restored = []

        seen: set[str] = set()
        tasks: list[Task] = []
        for task in restored:
            if task.id in seen:
                logger.warning("Dropping duplicate stored task id {}", task.id)
                continue
            seen.add(task.id)
            tasks.append(task)
        self._tasks = tasks
        logger.debug("Loaded {} task(s)", len(tasks))
        return self.tasks

    def persist(self) -> bool:
        """Write the whole collection.  Returns False if the write failed."""
        try:
            self._adapter.save(self._tasks)
        except StorageError as exc:
            self.last_persist_error = str(exc)
            logger.error("Task list not saved: {}", exc)
            return False
        self.last_persist_error = None
        return True

    # -- lookups --------------------------------------------------------------

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def get(self, task_id: str) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def _index_of(self, task_id: str) -> int:
        for idx, task in enumerate(self._tasks):
            if task.id == task_id:
                return idx
        return -1

    # -- mutations ------------------------------------------------------------

    def add(self, raw_text: str) -> Optional[Task]:
        """Prepend a new task.  Blank text is ignored and nothing is written."""
        text = normalize_text(raw_text)
        if not text:
            return None
        now = self._clock.now()
        task = Task(
            id=generate_id(now, {t.id for t in self._tasks}),
            text=text,
            done=False,
            created_at=now,
        )
        self._tasks.insert(0, task)
        logger.info("Added task {}: {}", task.id, text)
        self.persist()
        return task

    def toggle(self, task_id: str) -> Optional[Task]:
        idx = self._index_of(task_id)
        if idx < 0:
            logger.debug("toggle: no task {}", task_id)
            return None
        task = self._tasks[idx] = self._tasks[idx].toggled()
        logger.info("Task {} marked {}", task.id, "done" if task.done else "active")
        self.persist()
        return task

    def remove(self, task_id: str) -> bool:
        idx = self._index_of(task_id)
        if idx < 0:
            logger.debug("remove: no task {}", task_id)
            return False
        removed = self._tasks.pop(idx)
        logger.info("Removed task {}", removed.id)
        self.persist()
        return True

    def clear_completed(self) -> int:
        """Drop every completed task, keeping the rest in order."""
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if not t.done]
        removed = before - len(self._tasks)
        logger.info("Cleared {} completed task(s)", removed)
        self.persist()
        return removed

    def clear_all(self) -> bool:
        """Empty the collection after the user confirms."""
        if not self._prompt.confirm(CLEAR_ALL_MESSAGE):
            logger.debug("clear_all declined")
            return False
        self._tasks = []
        logger.info("Cleared all tasks")
        self.persist()
        return True

    # -- derived views --------------------------------------------------------

    def completed_count(self) -> int:
        return sum(1 for t in self._tasks if t.done)

    def filtered_view(self, mode: Union[FilterMode, str] = FilterMode.ALL) -> tuple[Task, ...]:
        return apply_filter(self._tasks, mode)
