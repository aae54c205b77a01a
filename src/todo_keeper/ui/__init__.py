"""Terminal presentation: list rendering and confirmation prompts."""

from .prompt import ConsolePrompt, StaticPrompt
from .render import ListRenderer

__all__ = ["ConsolePrompt", "ListRenderer", "StaticPrompt"]
