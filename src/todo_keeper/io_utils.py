from __future__ import annotations

import json
import os
from pathlib import Path
from typing import IO, Any, Optional

import yaml

from .constants import WINDOWS_LOCK_BYTES


if os.name == "nt":  # pragma: no cover - exercised on Windows only
    import msvcrt

    def _lock_handle(handle: IO[str]) -> None:
        handle.seek(0)
        handle.truncate(WINDOWS_LOCK_BYTES)
        handle.flush()
        msvcrt.locking(handle.fileno(), msvcrt.LK_LOCK, WINDOWS_LOCK_BYTES)

    def _unlock_handle(handle: IO[str]) -> None:
        handle.seek(0)
        msvcrt.locking(handle.fileno(), msvcrt.LK_UNLCK, WINDOWS_LOCK_BYTES)

else:
    import fcntl

    def _lock_handle(handle: IO[str]) -> None:
        fcntl.flock(handle, fcntl.LOCK_EX)

    def _unlock_handle(handle: IO[str]) -> None:
        fcntl.flock(handle, fcntl.LOCK_UN)


class FileLock:
    """Exclusive advisory lock held on a sidecar file.

    Entering raises ``OSError`` when the lock file cannot be created; the
    handle is closed again before the error propagates.
    """

    def __init__(self, lock_path: Path) -> None:
        self.lock_path = lock_path
        self.handle: Optional[IO[str]] = None

    def __enter__(self) -> "FileLock":
        self.lock_path.parent.mkdir(parents=True, exist_ok=True)
        handle = open(self.lock_path, "a+", encoding="utf-8")
        try:
            _lock_handle(handle)
        except OSError:
            handle.close()
            raise
        self.handle = handle
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.handle is None:
            return
        try:
            _unlock_handle(self.handle)
        finally:
            self.handle.close()
            self.handle = None


def _atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=2, ensure_ascii=False)
        handle.flush()
        os.fsync(handle.fileno())
    os.replace(tmp_path, path)


def _load_data_with_error(
    path: Path,
    default: dict[str, Any],
) -> tuple[dict[str, Any], str | None]:
    """
    Load JSON/YAML and return (data, error_message).

    Parse/IO failures are reported instead of raised so callers can decide
    whether to fall back to defaults or leave the file alone.
    """
    if not path.exists():
        return default, None
    try:
        with open(path, "r", encoding="utf-8") as handle:
            if path.suffix in {".yaml", ".yml"}:
                data = yaml.safe_load(handle)
            else:
                data = json.load(handle)
        if data is None:
            return default, None
        if not isinstance(data, dict):
            return default, f"{path.name}: expected object, got {type(data).__name__}"
        return data, None
    except OSError as exc:
        return default, f"{path.name}: {exc.__class__.__name__}: {exc}"
    except json.JSONDecodeError as exc:
        return default, f"{path.name}: JSONDecodeError: {exc}"
    except yaml.YAMLError as exc:
        return default, f"{path.name}: YAMLError: {exc}"
    except UnicodeDecodeError as exc:
        return default, f"{path.name}: UnicodeDecodeError: {exc}"
