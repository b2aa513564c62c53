"""JSON file utilities."""
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def read_json_file(path: Path, default: object) -> object:
    """Read and parse a JSON file; missing or malformed files give ``default``."""
    if not path.exists():
        return default
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.error(f"Malformed JSON in {path}: line {e.lineno}, column {e.colno}")
        return default
