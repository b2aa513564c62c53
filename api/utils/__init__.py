"""Utility modules."""
from api.utils.json_utils import read_json_file
from api.utils.time_utils import format_clock, parse_iso_timestamp, utc_now
from api.utils.validation import validate_id

__all__ = [
    "read_json_file",
    "format_clock",
    "parse_iso_timestamp",
    "utc_now",
    "validate_id",
]
