"""Pieces shared by the MCQ, written and flashcard sessions."""
from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence

from core.errors import InvalidTransition, NotFound


class SessionStatus(str, enum.Enum):
    """Lifecycle of a study session."""

    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class HasId(Protocol):
    id: str


@dataclass(frozen=True)
class SessionSummary:
    """Derived outcome handed to the results collaborator."""

    kind: str
    correct_count: int
    total_count: int
    answered_count: int
    time_spent_seconds: int
    score_percent: int | None = None
    accuracy_percent: int | None = None
    incorrect_count: int = 0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (12.5 -> 13)."""
    return int(math.floor(value + 0.5))


def percent(part: int, whole: int) -> int:
    """Rounded percentage in [0, 100]; 0 for an empty whole."""
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def clamp_cursor(cursor: int, length: int) -> int:
    return max(0, min(cursor, length - 1))


def validate_items(items: Iterable[HasId], label: str) -> tuple:
    """Freeze items into a tuple, rejecting empty sets and duplicate ids."""
    frozen = tuple(items)
    if not frozen:
        raise ValueError(f"Cannot start a session without {label}")
    ids = [item.id for item in frozen]
    if len(set(ids)) != len(ids):
        raise ValueError(f"Duplicate {label} ids")
    return frozen


def validate_duration(duration_seconds: int) -> int:
    if duration_seconds <= 0:
        raise ValueError("duration_seconds must be positive")
    return duration_seconds


def find_item(items: Sequence[HasId], item_id: str):
    for item in items:
        if item.id == item_id:
            return item
    raise NotFound(f"Item {item_id!r} is not part of this session")


def ensure_in_progress(completed: bool) -> None:
    if completed:
        raise InvalidTransition("Session is already completed")


def ensure_completed(completed: bool) -> None:
    if not completed:
        raise InvalidTransition("Session is not completed yet")
