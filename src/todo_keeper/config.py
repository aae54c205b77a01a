"""Load optional configuration from `.todo_keeper/config.yaml`."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .constants import CONFIG_FILE, DEFAULT_LOG_LEVEL, STATE_DIR_NAME, STORAGE_FILE, STORAGE_KEY
from .io_utils import _load_data_with_error

VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


def load_config(project_dir: Path) -> tuple[dict[str, Any], str | None]:
    """Load the optional config file.

    Args:
        project_dir: Directory holding the `.todo_keeper/` state directory.

    Returns:
        A tuple of `(config, error_message)`. If the file is missing, returns `({}, None)`.
    """
    path = project_dir.resolve() / STATE_DIR_NAME / CONFIG_FILE
    data, err = _load_data_with_error(path, {})
    if err:
        return {}, err
    return data, None


def _get_nested(config: dict[str, Any], *keys: str) -> Any:
    cur: Any = config
    for key in keys:
        if not isinstance(cur, dict):
            return None
        cur = cur.get(key)
    return cur


def get_storage_key(config: dict[str, Any]) -> str:
    raw = _get_nested(config, "storage", "key")
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    return STORAGE_KEY


def get_storage_file(config: dict[str, Any]) -> str:
    """Return the storage file name (relative to the state directory)."""
    raw = _get_nested(config, "storage", "file")
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    return STORAGE_FILE


def get_log_level(config: dict[str, Any]) -> str:
    raw = _get_nested(config, "logging", "level")
    if isinstance(raw, str) and raw.strip().upper() in VALID_LOG_LEVELS:
        return raw.strip().upper()
    return DEFAULT_LOG_LEVEL


def get_confirm_clear_all(config: dict[str, Any]) -> bool:
    """Whether `clear-all` asks before wiping the list (default: True)."""
    raw = config.get("confirm_clear_all")
    if isinstance(raw, bool):
        return raw
    return True
