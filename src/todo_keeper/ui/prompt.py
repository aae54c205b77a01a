"""Confirmation prompts consulted by destructive store operations."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.prompt import Confirm


class ConsolePrompt:
    """Ask the user on the terminal; defaults to "no"."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def confirm(self, message: str) -> bool:
        try:
            return Confirm.ask(f"[bold yellow]{message}[/bold yellow]", console=self.console, default=False)
        except (EOFError, KeyboardInterrupt):
            # closed stdin or Ctrl-C: treat as declined
            self.console.print()
            return False


class StaticPrompt:
    """Answer every confirmation with a fixed value.

    Used for ``--yes`` and when confirmation is disabled in config.
    """

    def __init__(self, answer: bool) -> None:
        self.answer = answer
        self.asked: list[str] = []

    def confirm(self, message: str) -> bool:
        self.asked.append(message)
        return self.answer
