STATE_DIR_NAME = ".todo_keeper"
CONFIG_FILE = "config.yaml"
STORAGE_FILE = "local_storage.json"
STORAGE_LOCK_FILE = "local_storage.lock"
STORAGE_KEY = "todo_store_v1"
WINDOWS_LOCK_BYTES = 4096

ID_SUFFIX_LENGTH = 4
ID_MAX_ATTEMPTS = 16

DEFAULT_LOG_LEVEL = "WARNING"
CLEAR_ALL_MESSAGE = "Delete all tasks?"
EMPTY_VIEW_MESSAGE = "No tasks to show."
