"""View filter: which subset of the collection the front end is showing."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Iterable, Union

from .model import Task

if TYPE_CHECKING:
    from .store import TaskStore


class FilterMode(str, Enum):
    """Subset selector for the task list."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


def coerce_mode(mode: Union[FilterMode, str]) -> FilterMode:
    if isinstance(mode, FilterMode):
        return mode
    return FilterMode(str(mode).strip().lower())


def apply_filter(tasks: Iterable[Task], mode: Union[FilterMode, str]) -> tuple[Task, ...]:
    """Return the tasks visible under *mode* without touching the input."""
    mode = coerce_mode(mode)
    if mode == FilterMode.ACTIVE:
        return tuple(t for t in tasks if not t.done)
    if mode == FilterMode.COMPLETED:
        return tuple(t for t in tasks if t.done)
    return tuple(tasks)


class ViewFilter:
    """Holds the current filter mode for one front-end session.

    The mode is a view concern only and is never persisted.
    """

    def __init__(self, mode: Union[FilterMode, str] = FilterMode.ALL) -> None:
        self.mode = coerce_mode(mode)

    def set_mode(self, mode: Union[FilterMode, str]) -> None:
        self.mode = coerce_mode(mode)

    def visible(self, store: "TaskStore") -> tuple[Task, ...]:
        return store.filtered_view(self.mode)
