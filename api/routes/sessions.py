"""Live study session endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from api.models import AnswerRequest, FlashcardResponseRequest
from api.services.session_service import (
    HostedSession,
    SessionKind,
    SessionRegistry,
    get_session_registry,
)
from api.utils import validate_id
from core import flashcard_session, mcq_session, written_session
from serialization import (
    serialize_review,
    serialize_session,
    serialize_summary,
    serialize_written_answers,
)

router = APIRouter(prefix="/api/sessions/{session_id}", tags=["sessions"])

Registry = Annotated[SessionRegistry, Depends(get_session_registry)]

TIMED = (SessionKind.MCQ, SessionKind.WRITTEN)
ALL_KINDS = (SessionKind.MCQ, SessionKind.WRITTEN, SessionKind.FLASHCARD)

NEXT = {
    SessionKind.MCQ.value: mcq_session.advance,
    SessionKind.WRITTEN.value: written_session.advance,
    SessionKind.FLASHCARD.value: flashcard_session.next_card,
}
PREVIOUS = {
    SessionKind.MCQ.value: mcq_session.retreat,
    SessionKind.WRITTEN.value: written_session.retreat,
    SessionKind.FLASHCARD.value: flashcard_session.previous_card,
}
SUBMIT = {
    SessionKind.MCQ.value: mcq_session.submit,
    SessionKind.WRITTEN.value: written_session.submit,
}


def _view(registry: SessionRegistry, hosted: HostedSession) -> dict[str, object]:
    return serialize_session(hosted, registry.elapsed_seconds(hosted))


def _by_kind(table: dict, registry: SessionRegistry, session_id: str, kinds):
    """Apply the transition registered for the session's kind."""
    hosted = registry.get(session_id)
    transition = table.get(hosted.kind)
    if transition is None:
        raise HTTPException(
            status_code=400,
            detail=f"Operation not available for {hosted.kind} sessions",
        )
    return registry.apply(session_id, kinds, transition)


@router.get("")
def get_session(session_id: str, registry: Registry) -> dict[str, object]:
    """Get the current view of a session."""
    hosted = registry.get(validate_id("sessionId", session_id))
    return _view(registry, hosted)


@router.delete("")
def leave_session(session_id: str, registry: Registry) -> dict[str, object]:
    """Leave a session and discard its state."""
    hosted = registry.discard(validate_id("sessionId", session_id))
    return {"status": "discarded", "sessionId": hosted.id, "completed": hosted.completed}


@router.post("/answers")
def answer_question(
    session_id: str, payload: AnswerRequest, registry: Registry
) -> dict[str, object]:
    """Record the selected option (MCQ) or the answer text (written)."""
    session_id = validate_id("sessionId", session_id)
    hosted = registry.get(session_id)
    if hosted.kind == SessionKind.MCQ.value:
        if payload.optionIndex is None:
            raise HTTPException(status_code=400, detail="optionIndex is required")
        hosted = registry.apply(
            session_id, (SessionKind.MCQ,), mcq_session.select_answer,
            payload.questionId, payload.optionIndex,
        )
    elif hosted.kind == SessionKind.WRITTEN.value:
        if payload.text is None:
            raise HTTPException(status_code=400, detail="text is required")
        hosted = registry.apply(
            session_id, (SessionKind.WRITTEN,), written_session.write_answer,
            payload.questionId, payload.text,
        )
    else:
        raise HTTPException(
            status_code=400, detail="Flashcard sessions take responses, not answers"
        )
    return _view(registry, hosted)


@router.post("/next")
def next_item(session_id: str, registry: Registry) -> dict[str, object]:
    """Move to the next question or card."""
    hosted = _by_kind(NEXT, registry, validate_id("sessionId", session_id), ALL_KINDS)
    return _view(registry, hosted)


@router.post("/previous")
def previous_item(session_id: str, registry: Registry) -> dict[str, object]:
    """Move to the previous question or card."""
    hosted = _by_kind(PREVIOUS, registry, validate_id("sessionId", session_id), ALL_KINDS)
    return _view(registry, hosted)


@router.post("/submit")
def submit_session(session_id: str, registry: Registry) -> dict[str, object]:
    """Submit a timed exam session."""
    hosted = _by_kind(SUBMIT, registry, validate_id("sessionId", session_id), TIMED)
    return _view(registry, hosted)


@router.post("/flip")
def flip_card(session_id: str, registry: Registry) -> dict[str, object]:
    """Flip the current flashcard."""
    hosted = registry.apply(
        validate_id("sessionId", session_id),
        (SessionKind.FLASHCARD,),
        flashcard_session.flip,
    )
    return _view(registry, hosted)


@router.post("/respond")
def respond_to_card(
    session_id: str, payload: FlashcardResponseRequest, registry: Registry
) -> dict[str, object]:
    """Mark the current flashcard as known or not known."""
    hosted = registry.apply(
        validate_id("sessionId", session_id),
        (SessionKind.FLASHCARD,),
        flashcard_session.respond,
        payload.correct,
    )
    return _view(registry, hosted)


@router.post("/restart")
def restart_study(session_id: str, registry: Registry) -> dict[str, object]:
    """Study the same deck again from the first card."""
    hosted = registry.apply(
        validate_id("sessionId", session_id),
        (SessionKind.FLASHCARD,),
        flashcard_session.restart,
    )
    return _view(registry, hosted)


@router.get("/summary")
def get_summary(session_id: str, registry: Registry) -> dict[str, object]:
    """Summary of a completed session."""
    hosted = registry.get(validate_id("sessionId", session_id))
    return serialize_summary(registry.summary_for(hosted))


@router.get("/review")
def get_review(session_id: str, registry: Registry) -> list[dict[str, object]]:
    """Per-question review of a completed exam session."""
    hosted = registry.get(validate_id("sessionId", session_id))
    if hosted.kind == SessionKind.MCQ.value:
        return serialize_review(mcq_session.review(hosted.state))
    if hosted.kind == SessionKind.WRITTEN.value:
        if not hosted.completed:
            raise HTTPException(status_code=409, detail="Session is not completed yet")
        return serialize_written_answers(hosted.state)
    raise HTTPException(status_code=400, detail="Flashcard sessions have no review")
