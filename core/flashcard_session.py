"""Flashcard review session.

A card id lives in at most one of ``correct``/``incorrect``; answering a
card again moves it between the two. Manual navigation never touches the
tracking sets.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from core.errors import InvalidTransition
from core.session_state import (
    SessionStatus,
    SessionSummary,
    clamp_cursor,
    ensure_completed,
    ensure_in_progress,
    percent,
    validate_items,
)
from models import FlashCard

KIND = "flashcard"


@dataclass(frozen=True)
class FlashcardSessionState:
    items: tuple[FlashCard, ...]
    cursor: int = 0
    flipped: bool = False
    studied: frozenset[str] = frozenset()
    correct: frozenset[str] = frozenset()
    incorrect: frozenset[str] = frozenset()
    completed: bool = False

    @property
    def status(self) -> SessionStatus:
        if self.completed:
            return SessionStatus.COMPLETED
        return SessionStatus.IN_PROGRESS


def start(cards: Iterable[FlashCard]) -> FlashcardSessionState:
    return FlashcardSessionState(items=validate_items(cards, "cards"))


def current_card(state: FlashcardSessionState) -> FlashCard:
    return state.items[state.cursor]


def flip(state: FlashcardSessionState) -> FlashcardSessionState:
    ensure_in_progress(state.completed)
    return replace(state, flipped=not state.flipped)


def respond(state: FlashcardSessionState, correct: bool) -> FlashcardSessionState:
    """Mark the current card and move on; the last card completes the session."""
    ensure_in_progress(state.completed)
    if not state.flipped:
        raise InvalidTransition("Flip the card before answering")

    card_id = current_card(state).id
    studied = state.studied | {card_id}
    if correct:
        correct_ids = state.correct | {card_id}
        incorrect_ids = state.incorrect - {card_id}
    else:
        correct_ids = state.correct - {card_id}
        incorrect_ids = state.incorrect | {card_id}

    state = replace(
        state, studied=studied, correct=correct_ids, incorrect=incorrect_ids
    )
    if state.cursor >= len(state.items) - 1:
        return replace(state, completed=True)
    return replace(state, cursor=state.cursor + 1, flipped=False)


def previous_card(state: FlashcardSessionState) -> FlashcardSessionState:
    ensure_in_progress(state.completed)
    return replace(
        state, cursor=clamp_cursor(state.cursor - 1, len(state.items)), flipped=False
    )


def next_card(state: FlashcardSessionState) -> FlashcardSessionState:
    ensure_in_progress(state.completed)
    return replace(
        state, cursor=clamp_cursor(state.cursor + 1, len(state.items)), flipped=False
    )


def restart(state: FlashcardSessionState) -> FlashcardSessionState:
    return start(state.items)


def progress_percent(state: FlashcardSessionState) -> int:
    return percent(len(state.studied), len(state.items))


def accuracy(state: FlashcardSessionState) -> int:
    return percent(len(state.correct), len(state.studied))


def summary(
    state: FlashcardSessionState, time_spent_seconds: int = 0
) -> SessionSummary:
    ensure_completed(state.completed)
    return SessionSummary(
        kind=KIND,
        correct_count=len(state.correct),
        incorrect_count=len(state.incorrect),
        total_count=len(state.items),
        answered_count=len(state.studied),
        time_spent_seconds=time_spent_seconds,
        accuracy_percent=accuracy(state),
    )
