"""Render task lists as rich tables."""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..constants import EMPTY_VIEW_MESSAGE
from ..task_engine.filters import FilterMode
from ..task_engine.model import Task
from ..utils import _format_local


class ListRenderer:
    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def build_table(self, tasks: Sequence[Task], mode: FilterMode = FilterMode.ALL) -> Table:
        table = Table(title=f"Tasks ({mode.value})", show_lines=False)
        table.add_column("", width=3, justify="center")
        table.add_column("Task", overflow="fold")
        table.add_column("ID", style="dim", no_wrap=True)
        table.add_column("Created", style="dim", no_wrap=True)
        for task in tasks:
            mark = Text("✓", style="green") if task.done else Text("·", style="dim")
            text = Text(task.text, style="dim strike" if task.done else "")
            table.add_row(mark, text, task.id, _format_local(task.created_at))
        return table

    def render(self, tasks: Sequence[Task], mode: FilterMode, completed: int) -> None:
        if not tasks:
            self.console.print(f"[dim]{EMPTY_VIEW_MESSAGE}[/dim]")
        else:
            self.console.print(self.build_table(tasks, mode))
        self.console.print(f"[bold]{completed}[/bold] completed")
