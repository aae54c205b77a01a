from __future__ import annotations

from pathlib import Path
from typing import Optional

from loguru import logger

from .config import get_confirm_clear_all, get_storage_file, get_storage_key, load_config
from .constants import STATE_DIR_NAME, STORAGE_LOCK_FILE
from .storage import FileKeyValueStore, KeyValueStore, PersistenceAdapter
from .task_engine.filters import ViewFilter
from .task_engine.store import TaskStore, UserPrompt
from .ui.prompt import StaticPrompt
from .utils import Clock


class TodoContainer:
    """Wire configuration, storage, store and view filter for one project.

    The store is loaded on construction; callers get it by reference.
    """

    def __init__(
        self,
        project_dir: Path,
        prompt: UserPrompt,
        *,
        kv: Optional[KeyValueStore] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.project_dir = project_dir.resolve()
        self.state_dir = self.project_dir / STATE_DIR_NAME
        self.config, config_error = load_config(self.project_dir)
        if config_error:
            logger.warning("Ignoring config file: {}", config_error)

        if not get_confirm_clear_all(self.config):
            prompt = StaticPrompt(True)

        self.kv = kv or FileKeyValueStore(
            self.state_dir / get_storage_file(self.config),
            self.state_dir / STORAGE_LOCK_FILE,
        )
        self.adapter = PersistenceAdapter(self.kv, get_storage_key(self.config))
        self.store = TaskStore(self.adapter, prompt, clock)
        self.view = ViewFilter()
        self.store.load()
