import os
import sys
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s'

# Define base path for files written next to the app (frozen builds use _MEIPASS)
try:
    base_path = sys._MEIPASS
except AttributeError:
    base_path = os.path.abspath(".")

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000
DEFAULT_STORAGE = "memory"
DEFAULT_STORAGE_FILE_NAME = "kenken_games.json"
DEFAULT_SAVE_FILE_NAME = "kenken_save.json"
STORAGE_BACKENDS = ("memory", "json")


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}; using {default}")
        return default


def load_config() -> Dict[str, Any]:
    """Reads KENKEN_* environment variables into a config dict with defaults applied."""
    storage = os.environ.get("KENKEN_STORAGE", DEFAULT_STORAGE).strip().lower()
    if storage not in STORAGE_BACKENDS:
        logger.warning(f"Unknown KENKEN_STORAGE={storage!r}; using '{DEFAULT_STORAGE}'")
        storage = DEFAULT_STORAGE

    return {
        "LOG_LEVEL": os.environ.get("KENKEN_LOG_LEVEL", "INFO").upper(),
        "HOST": os.environ.get("KENKEN_HOST", DEFAULT_HOST),
        "PORT": _env_int("KENKEN_PORT", DEFAULT_PORT),
        "STORAGE": storage,
        "STORAGE_PATH": os.environ.get("KENKEN_STORAGE_PATH", os.path.join(base_path, DEFAULT_STORAGE_FILE_NAME)),
        "SAVE_PATH": os.environ.get("KENKEN_SAVE_PATH", os.path.join(base_path, DEFAULT_SAVE_FILE_NAME)),
        "SEED": _env_int("KENKEN_SEED", None),
    }


def setup_logging(level: str = "INFO") -> None:
    """Configures root logging for an entry point."""
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    # basicConfig is a no-op when handlers already exist
    logging.getLogger().setLevel(numeric_level)
