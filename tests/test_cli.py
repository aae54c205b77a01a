from __future__ import annotations

import io
import json
from pathlib import Path

import pytest
from rich.console import Console
from rich.prompt import Confirm

from todo_keeper.cli import TodoShell, main
from todo_keeper.constants import CONFIG_FILE, EMPTY_VIEW_MESSAGE, STATE_DIR_NAME
from todo_keeper.container import TodoContainer
from todo_keeper.storage import MemoryKeyValueStore, StorageError
from todo_keeper.ui.prompt import ConsolePrompt, StaticPrompt


def _console() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, width=120, force_terminal=False, color_system=None), buf


def _run(tmp_path: Path, *argv: str) -> int:
    console, _ = _console()
    return main(["--project-dir", str(tmp_path), *argv], console=console)


def _tasks(tmp_path: Path, capsys: pytest.CaptureFixture[str], mode: str = "all") -> list[dict]:
    capsys.readouterr()
    assert _run(tmp_path, "list", "--filter", mode, "--json") == 0
    return json.loads(capsys.readouterr().out)["tasks"]


def test_add_toggle_list_and_clear(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "add", "Buy", "milk") == 0
    milk_id = capsys.readouterr().out.strip()
    assert _run(tmp_path, "add", "Walk dog") == 0

    tasks = _tasks(tmp_path, capsys)
    assert [t["text"] for t in tasks] == ["Walk dog", "Buy milk"]
    assert (tmp_path / STATE_DIR_NAME / "local_storage.json").exists()

    assert _run(tmp_path, "toggle", milk_id) == 0
    assert [t["text"] for t in _tasks(tmp_path, capsys, "completed")] == ["Buy milk"]
    assert [t["text"] for t in _tasks(tmp_path, capsys, "active")] == ["Walk dog"]

    capsys.readouterr()
    assert _run(tmp_path, "count") == 0
    assert json.loads(capsys.readouterr().out) == {"total": 2, "active": 1, "completed": 1}

    assert _run(tmp_path, "clear-completed") == 0
    assert [(t["text"], t["done"]) for t in _tasks(tmp_path, capsys)] == [("Walk dog", False)]


def test_blank_add_and_unknown_ids_fail(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "add", "   ") == 1
    assert _run(tmp_path, "toggle", "nope") == 1
    assert _run(tmp_path, "rm", "nope") == 1
    assert "No task with id nope" in capsys.readouterr().err
    assert _tasks(tmp_path, capsys) == []


def test_rm(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _run(tmp_path, "add", "temp")
    task_id = capsys.readouterr().out.strip()
    assert _run(tmp_path, "rm", task_id) == 0
    assert _tasks(tmp_path, capsys) == []


def test_clear_all_with_yes(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _run(tmp_path, "add", "a")
    _run(tmp_path, "add", "b")
    assert _run(tmp_path, "clear-all", "--yes") == 0
    assert _tasks(tmp_path, capsys) == []


def test_clear_all_skips_prompt_when_disabled(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    state = tmp_path / STATE_DIR_NAME
    state.mkdir()
    (state / CONFIG_FILE).write_text("confirm_clear_all: false\n", encoding="utf-8")
    _run(tmp_path, "add", "a")
    assert _run(tmp_path, "clear-all") == 0
    assert _tasks(tmp_path, capsys) == []


def test_list_renders_table_and_empty_message(tmp_path: Path) -> None:
    console, buf = _console()
    assert main(["--project-dir", str(tmp_path), "list"], console=console) == 0
    assert EMPTY_VIEW_MESSAGE in buf.getvalue()
    assert "0 completed" in buf.getvalue()

    _run(tmp_path, "add", "Buy milk")
    console, buf = _console()
    assert main(["--project-dir", str(tmp_path), "list"], console=console) == 0
    assert "Buy milk" in buf.getvalue()


def test_custom_storage_key_from_config(tmp_path: Path) -> None:
    state = tmp_path / STATE_DIR_NAME
    state.mkdir()
    (state / CONFIG_FILE).write_text("storage:\n  key: custom_key\n", encoding="utf-8")
    _run(tmp_path, "add", "a")
    stored = json.loads((state / "local_storage.json").read_text(encoding="utf-8"))
    assert list(stored) == ["custom_key"]


# ---------------------------------------------------------------------------
# Interactive shell
# ---------------------------------------------------------------------------

def _shell(tmp_path: Path, kv: MemoryKeyValueStore, answer: bool = True) -> tuple[TodoShell, io.StringIO]:
    console, buf = _console()
    container = TodoContainer(tmp_path, StaticPrompt(answer), kv=kv)
    return TodoShell(container, console), buf


def test_shell_session(tmp_path: Path) -> None:
    shell, buf = _shell(tmp_path, MemoryKeyValueStore())
    assert shell.handle("add Buy milk") is True
    assert shell.handle('add "Walk dog"') is True
    milk = shell.store.tasks[1]
    shell.handle(f"toggle {milk.id}")
    shell.handle("filter completed")
    assert [t.text for t in shell.view.visible(shell.store)] == ["Buy milk"]

    shell.handle("clear-completed")
    assert [t.text for t in shell.store.tasks] == ["Walk dog"]
    assert EMPTY_VIEW_MESSAGE in buf.getvalue()

    shell.handle("filter bogus")
    assert "filter takes one of" in buf.getvalue()
    shell.handle("frobnicate")
    assert "Unknown command" in buf.getvalue()
    assert shell.handle("quit") is False


def test_shell_clear_all_declined(tmp_path: Path) -> None:
    class Counting(MemoryKeyValueStore):
        writes = 0

        def set(self, key: str, value: str) -> None:
            self.writes += 1
            super().set(key, value)

    kv = Counting()
    shell, _ = _shell(tmp_path, kv, answer=False)
    shell.handle("add keep me")
    writes = kv.writes
    shell.handle("clear-all")
    assert len(shell.store.tasks) == 1
    assert kv.writes == writes


def test_shell_survives_storage_failure(tmp_path: Path) -> None:
    class Broken(MemoryKeyValueStore):
        def set(self, key: str, value: str) -> None:
            raise StorageError("disk full")

    shell, buf = _shell(tmp_path, Broken())
    assert shell.handle("add still here") is True
    assert [t.text for t in shell.store.tasks] == ["still here"]
    assert "Changes were not saved: disk full" in buf.getvalue()


def test_shell_ctrl_c_at_confirmation_declines(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def interrupted(*_args, **_kwargs) -> bool:
        raise KeyboardInterrupt

    monkeypatch.setattr(Confirm, "ask", interrupted)
    console, _ = _console()
    container = TodoContainer(tmp_path, ConsolePrompt(console), kv=MemoryKeyValueStore())
    shell = TodoShell(container, console)
    shell.handle("add keep me")
    assert shell.handle("clear-all") is True
    assert [t.text for t in shell.store.tasks] == ["keep me"]
