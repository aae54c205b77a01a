"""Provide the public `todo_keeper` package exports."""

from __future__ import annotations

from .container import TodoContainer
from .task_engine.filters import FilterMode, ViewFilter
from .task_engine.model import Task
from .task_engine.store import TaskStore

__all__ = ["FilterMode", "Task", "TaskStore", "TodoContainer", "ViewFilter"]
__version__ = "0.1.0"
