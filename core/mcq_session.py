"""Timed multiple-choice exam session.

Every function takes a ``McqSessionState`` and returns a new one; states are
never mutated in place, so a rejected call leaves the caller's state intact.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable

from core.errors import InvalidTransition
from core.session_state import (
    SessionStatus,
    SessionSummary,
    clamp_cursor,
    ensure_completed,
    ensure_in_progress,
    find_item,
    percent,
    validate_duration,
    validate_items,
)
from models import McqQuestion

KIND = "mcq"


@dataclass(frozen=True)
class McqSessionState:
    items: tuple[McqQuestion, ...]
    duration_seconds: int
    remaining_seconds: int
    cursor: int = 0
    responses: dict[str, int] = field(default_factory=dict)
    completed: bool = False

    @property
    def status(self) -> SessionStatus:
        if self.completed:
            return SessionStatus.COMPLETED
        return SessionStatus.IN_PROGRESS


@dataclass(frozen=True)
class QuestionReview:
    question: McqQuestion
    selected_index: int | None
    is_correct: bool

    @property
    def answered(self) -> bool:
        return self.selected_index is not None


def start(questions: Iterable[McqQuestion], duration_seconds: int) -> McqSessionState:
    items = validate_items(questions, "questions")
    duration = validate_duration(duration_seconds)
    return McqSessionState(
        items=items,
        duration_seconds=duration,
        remaining_seconds=duration,
    )


def current_question(state: McqSessionState) -> McqQuestion:
    return state.items[state.cursor]


def select_answer(
    state: McqSessionState, question_id: str, option_index: int
) -> McqSessionState:
    """Record (or overwrite) the selected option for a question."""
    ensure_in_progress(state.completed)
    question = find_item(state.items, question_id)
    if not 0 <= option_index < len(question.options):
        raise InvalidTransition(
            f"Option {option_index} is out of range for question {question_id!r}"
        )
    responses = dict(state.responses)
    responses[question_id] = option_index
    return replace(state, responses=responses)


def advance(state: McqSessionState) -> McqSessionState:
    ensure_in_progress(state.completed)
    return replace(state, cursor=clamp_cursor(state.cursor + 1, len(state.items)))


def retreat(state: McqSessionState) -> McqSessionState:
    ensure_in_progress(state.completed)
    return replace(state, cursor=clamp_cursor(state.cursor - 1, len(state.items)))


def tick(state: McqSessionState) -> McqSessionState:
    """One second of exam time; expiry submits the exam."""
    if state.completed:
        return state
    remaining = max(0, state.remaining_seconds - 1)
    state = replace(state, remaining_seconds=remaining)
    if remaining == 0:
        return submit(state)
    return state


def submit(state: McqSessionState) -> McqSessionState:
    if state.completed:
        return state
    return replace(state, completed=True)


def answered_count(state: McqSessionState) -> int:
    return len(state.responses)


def correct_count(state: McqSessionState) -> int:
    return sum(
        1
        for question in state.items
        if state.responses.get(question.id) == question.correct_index
    )


def score(state: McqSessionState) -> int:
    """Percentage of questions answered correctly; unanswered ones count as wrong."""
    ensure_completed(state.completed)
    return percent(correct_count(state), len(state.items))


def time_spent_seconds(state: McqSessionState) -> int:
    return state.duration_seconds - state.remaining_seconds


def review(state: McqSessionState) -> list[QuestionReview]:
    ensure_completed(state.completed)
    reviews = []
    for question in state.items:
        selected = state.responses.get(question.id)
        reviews.append(
            QuestionReview(
                question=question,
                selected_index=selected,
                is_correct=selected == question.correct_index,
            )
        )
    return reviews


def summary(state: McqSessionState) -> SessionSummary:
    correct = correct_count(state)
    return SessionSummary(
        kind=KIND,
        correct_count=correct,
        incorrect_count=len(state.items) - correct,
        total_count=len(state.items),
        answered_count=answered_count(state),
        time_spent_seconds=time_spent_seconds(state),
        score_percent=score(state),
    )


def performance_label(score_percent: int) -> str:
    if score_percent >= 80:
        return "Excellent"
    if score_percent >= 60:
        return "Good"
    return "Needs Improvement"
