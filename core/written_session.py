"""Timed written exam session.

Answers are free text and there is no correctness concept here; grading
happens outside the session. The autosave tick only raises a transient
"saved" indicator, it does not write anywhere.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable

from core.session_state import (
    SessionStatus,
    SessionSummary,
    clamp_cursor,
    ensure_completed,
    ensure_in_progress,
    find_item,
    validate_duration,
    validate_items,
)
from models import WrittenQuestion

KIND = "written"
SAVED_INDICATOR_SECONDS = 2


@dataclass(frozen=True)
class WrittenSessionState:
    items: tuple[WrittenQuestion, ...]
    duration_seconds: int
    remaining_seconds: int
    cursor: int = 0
    responses: dict[str, str] = field(default_factory=dict)
    completed: bool = False
    # elapsed second at which the saved indicator disappears
    saved_until: int | None = None

    @property
    def status(self) -> SessionStatus:
        if self.completed:
            return SessionStatus.COMPLETED
        return SessionStatus.IN_PROGRESS

    @property
    def elapsed_seconds(self) -> int:
        return self.duration_seconds - self.remaining_seconds


def word_count(text: str | None) -> int:
    if not text:
        return 0
    return len(text.split())


def is_answered(text: str | None) -> bool:
    return bool(text and text.strip())


def start(
    questions: Iterable[WrittenQuestion], duration_seconds: int
) -> WrittenSessionState:
    items = validate_items(questions, "questions")
    duration = validate_duration(duration_seconds)
    return WrittenSessionState(
        items=items,
        duration_seconds=duration,
        remaining_seconds=duration,
    )


def current_question(state: WrittenSessionState) -> WrittenQuestion:
    return state.items[state.cursor]


def write_answer(
    state: WrittenSessionState, question_id: str, text: str
) -> WrittenSessionState:
    ensure_in_progress(state.completed)
    find_item(state.items, question_id)
    responses = dict(state.responses)
    responses[question_id] = text
    return replace(state, responses=responses)


def advance(state: WrittenSessionState) -> WrittenSessionState:
    ensure_in_progress(state.completed)
    return replace(state, cursor=clamp_cursor(state.cursor + 1, len(state.items)))


def retreat(state: WrittenSessionState) -> WrittenSessionState:
    ensure_in_progress(state.completed)
    return replace(state, cursor=clamp_cursor(state.cursor - 1, len(state.items)))


def tick(state: WrittenSessionState) -> WrittenSessionState:
    if state.completed:
        return state
    remaining = max(0, state.remaining_seconds - 1)
    state = replace(state, remaining_seconds=remaining)
    if remaining == 0:
        return submit(state)
    return state


def submit(state: WrittenSessionState) -> WrittenSessionState:
    """Finish the exam. Unanswered questions do not block submission."""
    if state.completed:
        return state
    return replace(state, completed=True, saved_until=None)


def autosave_tick(
    state: WrittenSessionState, indicator_seconds: int = SAVED_INDICATOR_SECONDS
) -> WrittenSessionState:
    if state.completed:
        return state
    answer = state.responses.get(current_question(state).id)
    if not is_answered(answer):
        return state
    return replace(state, saved_until=state.elapsed_seconds + indicator_seconds)


def saved_indicator_visible(state: WrittenSessionState) -> bool:
    if state.completed or state.saved_until is None:
        return False
    return state.elapsed_seconds < state.saved_until


def answered_count(state: WrittenSessionState) -> int:
    return sum(1 for question in state.items if is_answered(state.responses.get(question.id)))


def total_points(state: WrittenSessionState) -> int:
    return sum(question.points for question in state.items)


def answered_points(state: WrittenSessionState) -> int:
    return sum(
        question.points
        for question in state.items
        if is_answered(state.responses.get(question.id))
    )


def time_spent_seconds(state: WrittenSessionState) -> int:
    return state.elapsed_seconds


def summary(state: WrittenSessionState) -> SessionSummary:
    ensure_completed(state.completed)
    return SessionSummary(
        kind=KIND,
        correct_count=0,
        total_count=len(state.items),
        answered_count=answered_count(state),
        time_spent_seconds=time_spent_seconds(state),
    )
