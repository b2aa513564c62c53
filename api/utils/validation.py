"""Validation utilities."""
import re

from fastapi import HTTPException

# Catalog ids are slugs, session and result ids are uuid4 hex strings
ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def validate_id(name: str, value: str) -> str:
    """Strip an id from the URL and check it looks like a catalog or session id."""
    cleaned = value.strip() if isinstance(value, str) else ""
    if not cleaned:
        raise HTTPException(status_code=400, detail=f"{name} is required")
    if not ID_PATTERN.match(cleaned):
        raise HTTPException(status_code=400, detail=f"Invalid {name}")
    return cleaned
