"""Command-line front end for the to-do list.

Every sub-command loads the list, forwards one user intent to the store and
prints the result.  ``shell`` keeps the store and the view filter alive for
a whole interactive session.
"""

from __future__ import annotations

import argparse
import json
import shlex
import sys
from pathlib import Path
from typing import Callable, Optional

from rich.console import Console

from .config import VALID_LOG_LEVELS, get_log_level, load_config
from .container import TodoContainer
from .logging_utils import configure_logging
from .task_engine.filters import FilterMode
from .task_engine.store import TaskStore
from .ui.prompt import ConsolePrompt, StaticPrompt
from .ui.render import ListRenderer

FILTER_CHOICES = [mode.value for mode in FilterMode]


def _resolve_project_dir(project_dir: Optional[str]) -> Path:
    return Path(project_dir).expanduser().resolve() if project_dir else Path.cwd().resolve()


def _ctx(args: argparse.Namespace, console: Console) -> TodoContainer:
    project_dir = _resolve_project_dir(args.project_dir)
    if getattr(args, "yes", False):
        prompt = StaticPrompt(True)
    else:
        prompt = ConsolePrompt(console)
    return TodoContainer(project_dir, prompt)


def _report_persist(store: TaskStore) -> int:
    if store.last_persist_error:
        sys.stderr.write(f"Warning: changes were not saved ({store.last_persist_error})\n")
        return 1
    return 0


def _add(args: argparse.Namespace, console: Console) -> int:
    store = _ctx(args, console).store
    task = store.add(" ".join(args.text))
    if task is None:
        sys.stderr.write("Nothing to add: task text is empty\n")
        return 1
    sys.stdout.write(task.id + "\n")
    return _report_persist(store)


def _toggle(args: argparse.Namespace, console: Console) -> int:
    store = _ctx(args, console).store
    task = store.toggle(args.task_id)
    if task is None:
        sys.stderr.write(f"No task with id {args.task_id}\n")
        return 1
    sys.stdout.write(f"{task.id} {'done' if task.done else 'active'}\n")
    return _report_persist(store)


def _remove(args: argparse.Namespace, console: Console) -> int:
    store = _ctx(args, console).store
    if not store.remove(args.task_id):
        sys.stderr.write(f"No task with id {args.task_id}\n")
        return 1
    return _report_persist(store)


def _clear_completed(args: argparse.Namespace, console: Console) -> int:
    store = _ctx(args, console).store
    removed = store.clear_completed()
    sys.stdout.write(f"Removed {removed} completed task(s)\n")
    return _report_persist(store)


def _clear_all(args: argparse.Namespace, console: Console) -> int:
    store = _ctx(args, console).store
    if not store.clear_all():
        sys.stdout.write("Cancelled\n")
        return 0
    return _report_persist(store)


def _list(args: argparse.Namespace, console: Console) -> int:
    container = _ctx(args, console)
    container.view.set_mode(args.filter)
    tasks = container.view.visible(container.store)
    if args.json:
        sys.stdout.write(json.dumps({"tasks": [t.to_dict() for t in tasks]}, indent=2, ensure_ascii=False) + "\n")
        return 0
    ListRenderer(console).render(tasks, container.view.mode, container.store.completed_count())
    return 0


def _count(args: argparse.Namespace, console: Console) -> int:
    store = _ctx(args, console).store
    payload = {
        "total": len(store.tasks),
        "active": len(store.filtered_view(FilterMode.ACTIVE)),
        "completed": store.completed_count(),
    }
    sys.stdout.write(json.dumps(payload) + "\n")
    return 0


# ---------------------------------------------------------------------------
# Interactive shell
# ---------------------------------------------------------------------------

SHELL_HELP = """\
add TEXT          add a task
toggle ID         mark a task done / not done
rm ID             delete a task
clear-completed   delete every completed task
clear-all         delete every task (asks first)
filter MODE       show all | active | completed
list              redraw the list
quit              leave the shell"""


class TodoShell:
    """Line-oriented session over one store and one view filter."""

    def __init__(self, container: TodoContainer, console: Console) -> None:
        self.container = container
        self.store = container.store
        self.view = container.view
        self.console = console
        self.renderer = ListRenderer(console)
        self._commands: dict[str, Callable[[list[str]], None]] = {
            "add": self._add,
            "toggle": self._toggle,
            "rm": self._remove,
            "clear-completed": lambda _args: self.store.clear_completed(),
            "clear-all": lambda _args: self.store.clear_all(),
            "filter": self._filter,
            "list": lambda _args: None,
        }

    def show(self) -> None:
        self.renderer.render(self.view.visible(self.store), self.view.mode, self.store.completed_count())

    def _add(self, args: list[str]) -> None:
        if self.store.add(" ".join(args)) is None:
            self.console.print("[dim]Nothing to add.[/dim]")

    def _toggle(self, args: list[str]) -> None:
        for task_id in args:
            if self.store.toggle(task_id) is None:
                self.console.print(f"[red]No task with id {task_id}[/red]")

    def _remove(self, args: list[str]) -> None:
        for task_id in args:
            if not self.store.remove(task_id):
                self.console.print(f"[red]No task with id {task_id}[/red]")

    def _filter(self, args: list[str]) -> None:
        if len(args) != 1 or args[0].lower() not in FILTER_CHOICES:
            self.console.print(f"[red]filter takes one of: {', '.join(FILTER_CHOICES)}[/red]")
            return
        self.view.set_mode(args[0])

    def handle(self, line: str) -> bool:
        """Run one command line.  Returns False when the session should end."""
        try:
            parts = shlex.split(line)
        except ValueError as exc:
            self.console.print(f"[red]{exc}[/red]")
            return True
        if not parts:
            return True
        name, rest = parts[0].lower(), parts[1:]
        if name in {"quit", "exit"}:
            return False
        if name == "help":
            self.console.print(SHELL_HELP)
            return True
        handler = self._commands.get(name)
        if handler is None:
            self.console.print(f"[red]Unknown command {name!r}; type help[/red]")
            return True
        self.store.last_persist_error = None
        handler(rest)
        if self.store.last_persist_error:
            self.console.print(f"[yellow]Changes were not saved: {self.store.last_persist_error}[/yellow]")
        self.show()
        return True

    def run(self) -> int:
        self.show()
        while True:
            try:
                line = self.console.input("[bold cyan]todo>[/bold cyan] ")
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                return 0
            if not self.handle(line):
                return 0


def _shell(args: argparse.Namespace, console: Console) -> int:
    return TodoShell(_ctx(args, console), console).run()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Local to-do list")
    parser.add_argument("--project-dir", default=None, help="Directory holding .todo_keeper/ (default: current working directory)")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=sorted(VALID_LOG_LEVELS),
        help="Log level (default: from config, else WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Add a task")
    add.add_argument("text", nargs="+")
    add.set_defaults(func=_add)

    toggle = subparsers.add_parser("toggle", help="Mark a task done / not done")
    toggle.add_argument("task_id")
    toggle.set_defaults(func=_toggle)

    remove = subparsers.add_parser("rm", help="Delete a task")
    remove.add_argument("task_id")
    remove.set_defaults(func=_remove)

    clear_completed = subparsers.add_parser("clear-completed", help="Delete every completed task")
    clear_completed.set_defaults(func=_clear_completed)

    clear_all = subparsers.add_parser("clear-all", help="Delete every task")
    clear_all.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    clear_all.set_defaults(func=_clear_all)

    listing = subparsers.add_parser("list", help="Show tasks")
    listing.add_argument("--filter", default="all", choices=FILTER_CHOICES)
    listing.add_argument("--json", action="store_true", help="Print tasks as JSON")
    listing.set_defaults(func=_list)

    count = subparsers.add_parser("count", help="Print task counts as JSON")
    count.set_defaults(func=_count)

    shell = subparsers.add_parser("shell", help="Interactive session")
    shell.set_defaults(func=_shell)

    return parser


def main(argv: list[str] | None = None, console: Optional[Console] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, "func", None)
    if handler is None:
        parser.print_help()
        return 1
    config, _ = load_config(_resolve_project_dir(args.project_dir))
    configure_logging(args.log_level or get_log_level(config))
    return int(handler(args, console or Console()) or 0)
