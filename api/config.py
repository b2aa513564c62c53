"""Application configuration and constants."""
import os
from pathlib import Path

PROJECT_DIR = Path(__file__).resolve().parent.parent


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_bool_env(name: str, default: bool) -> bool:
    """Parse boolean flag (1/0, true/false, yes/no) from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# Content
CATALOG_PATH = Path(
    os.environ.get("CATALOG_PATH", PROJECT_DIR / "data" / "catalog.json")
)

# Session clock
SESSION_CLOCK_ENABLED = _parse_bool_env("SESSION_CLOCK_ENABLED", True)
TICK_INTERVAL_SECONDS = _parse_int_env("TICK_INTERVAL_SECONDS", 1)
AUTOSAVE_INTERVAL_SECONDS = _parse_int_env("AUTOSAVE_INTERVAL_SECONDS", 5)
SAVED_INDICATOR_SECONDS = _parse_int_env("SAVED_INDICATOR_SECONDS", 2)
SESSION_IDLE_TIMEOUT_MINUTES = _parse_int_env("SESSION_IDLE_TIMEOUT_MINUTES", 120)

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
