"""Service layer hosting live study sessions in memory."""
import enum
import logging
import threading
import time
import uuid
from dataclasses import dataclass
from typing import Any, Callable

from fastapi import HTTPException

from api.config import SAVED_INDICATOR_SECONDS
from api.services.results_service import ResultsStore, get_results_store
from core import flashcard_session, mcq_session, written_session
from core.session_state import SessionSummary
from models import ExamTemplate, FlashCardSet, McqQuestion, WrittenQuestion

logger = logging.getLogger(__name__)


class SessionKind(str, enum.Enum):
    """Kind of hosted session."""

    MCQ = "mcq"
    WRITTEN = "written"
    FLASHCARD = "flashcard"


@dataclass
class HostedSession:
    """A session state plus the bookkeeping the host needs around it."""

    id: str
    kind: str
    source_id: str
    title: str
    subject: str
    difficulty: str
    state: Any
    started_at: float
    last_activity: float
    completed_at: float | None = None
    completion_fired: bool = False

    @property
    def completed(self) -> bool:
        return self.state.completed


CompletionCallback = Callable[[HostedSession, SessionSummary], None]


class SessionRegistry:
    """
    Owns every live session.
    All events go through one lock, so each handler runs to completion
    before the next one is applied. The completion callback fires once per
    session, the first time it reaches the completed state.
    """

    def __init__(
        self,
        on_complete: CompletionCallback | None = None,
        clock: Callable[[], float] = time.monotonic,
        saved_indicator_seconds: int = SAVED_INDICATOR_SECONDS,
    ):
        self._sessions: dict[str, HostedSession] = {}
        self._lock = threading.Lock()
        self._on_complete = on_complete
        self._clock = clock
        self._saved_indicator_seconds = saved_indicator_seconds

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _host(
        self, kind: SessionKind, source_id: str, title: str, subject: str,
        difficulty: str, state: Any,
    ) -> HostedSession:
        now = self._clock()
        hosted = HostedSession(
            id=uuid.uuid4().hex,
            kind=kind.value,
            source_id=source_id,
            title=title,
            subject=subject,
            difficulty=difficulty,
            state=state,
            started_at=now,
            last_activity=now,
        )
        with self._lock:
            self._sessions[hosted.id] = hosted
        logger.info(f"New {kind.value} session: {hosted.id} [{title}]")
        return hosted

    def start_mcq(
        self, exam: ExamTemplate, questions: list[McqQuestion]
    ) -> HostedSession:
        state = mcq_session.start(questions, exam.duration_minutes * 60)
        return self._host(
            SessionKind.MCQ, exam.id, exam.title, exam.subject, exam.difficulty, state
        )

    def start_written(
        self, exam: ExamTemplate, questions: list[WrittenQuestion]
    ) -> HostedSession:
        state = written_session.start(questions, exam.duration_minutes * 60)
        return self._host(
            SessionKind.WRITTEN, exam.id, exam.title, exam.subject, exam.difficulty, state
        )

    def start_flashcards(self, deck: FlashCardSet) -> HostedSession:
        state = flashcard_session.start(deck.cards)
        return self._host(
            SessionKind.FLASHCARD, deck.id, deck.title, deck.subject, deck.difficulty, state
        )

    def get(self, session_id: str) -> HostedSession:
        with self._lock:
            hosted = self._sessions.get(session_id)
        if hosted is None:
            raise HTTPException(status_code=404, detail="Session not found")
        return hosted

    def apply(
        self,
        session_id: str,
        kinds: tuple[SessionKind, ...],
        transition: Callable[..., Any],
        *args: Any,
    ) -> HostedSession:
        """Run a transition against a session of one of the given kinds."""
        with self._lock:
            hosted = self._sessions.get(session_id)
            if hosted is None:
                raise HTTPException(status_code=404, detail="Session not found")
            if hosted.kind not in {kind.value for kind in kinds}:
                raise HTTPException(
                    status_code=400,
                    detail=f"Operation not available for {hosted.kind} sessions",
                )
            was_completed = hosted.completed
            hosted.state = transition(hosted.state, *args)
            hosted.last_activity = self._clock()
            if was_completed and not hosted.completed:
                # restarted: time the new pass from now
                hosted.started_at = hosted.last_activity
                hosted.completed_at = None
            summary = self._mark_completion(hosted)
        if summary is not None:
            self._fire_completion(hosted, summary)
        return hosted

    def discard(self, session_id: str) -> HostedSession:
        """Drop a session; the clock no longer reaches it afterwards."""
        with self._lock:
            hosted = self._sessions.pop(session_id, None)
        if hosted is None:
            raise HTTPException(status_code=404, detail="Session not found")
        status = "completed" if hosted.completed else "abandoned"
        logger.info(f"Discarded {hosted.kind} session {session_id} ({status})")
        return hosted

    def tick_all(self) -> int:
        """Advance every running countdown by one second; returns how many moved."""
        fired = []
        ticked = 0
        with self._lock:
            for hosted in self._sessions.values():
                if hosted.kind == SessionKind.MCQ.value:
                    state = mcq_session.tick(hosted.state)
                elif hosted.kind == SessionKind.WRITTEN.value:
                    state = written_session.tick(hosted.state)
                else:
                    continue
                if state is hosted.state:
                    continue
                hosted.state = state
                ticked += 1
                summary = self._mark_completion(hosted)
                if summary is not None:
                    logger.info(f"Time is up for session {hosted.id}")
                    fired.append((hosted, summary))
        for hosted, summary in fired:
            self._fire_completion(hosted, summary)
        return ticked

    def autosave_all(self) -> None:
        with self._lock:
            for hosted in self._sessions.values():
                if hosted.kind == SessionKind.WRITTEN.value:
                    hosted.state = written_session.autosave_tick(
                        hosted.state, self._saved_indicator_seconds
                    )

    def purge_idle(self, max_idle_seconds: float) -> int:
        """Discard sessions without user activity for longer than max_idle_seconds."""
        cutoff = self._clock() - max_idle_seconds
        with self._lock:
            stale = [
                session_id
                for session_id, hosted in self._sessions.items()
                if hosted.last_activity < cutoff
            ]
            for session_id in stale:
                del self._sessions[session_id]
        if stale:
            logger.info(f"Purged {len(stale)} idle sessions")
        return len(stale)

    def elapsed_seconds(self, hosted: HostedSession) -> int:
        if hosted.kind == SessionKind.FLASHCARD.value:
            end = hosted.completed_at if hosted.completed_at is not None else self._clock()
            return int(end - hosted.started_at)
        return hosted.state.duration_seconds - hosted.state.remaining_seconds

    def summary_for(self, hosted: HostedSession) -> SessionSummary:
        if hosted.kind == SessionKind.MCQ.value:
            return mcq_session.summary(hosted.state)
        if hosted.kind == SessionKind.WRITTEN.value:
            return written_session.summary(hosted.state)
        return flashcard_session.summary(hosted.state, self.elapsed_seconds(hosted))

    def _mark_completion(self, hosted: HostedSession) -> SessionSummary | None:
        """Stamp a newly completed session; returns its summary if the callback is due."""
        # caller holds the lock
        if not hosted.completed:
            return None
        if hosted.completed_at is None:
            hosted.completed_at = self._clock()
        if hosted.completion_fired:
            return None
        hosted.completion_fired = True
        return self.summary_for(hosted)

    def _fire_completion(self, hosted: HostedSession, summary: SessionSummary) -> None:
        logger.info(
            f"Session {hosted.id} completed: {summary.correct_count}/{summary.total_count} correct"
        )
        if self._on_complete is None:
            return
        try:
            self._on_complete(hosted, summary)
        except Exception as e:
            logger.error(f"Completion callback failed for session {hosted.id}: {e}")


def results_recorder(store: ResultsStore) -> CompletionCallback:
    """Completion callback that records finished sessions in a results store."""

    def _record(hosted: HostedSession, summary: SessionSummary) -> None:
        details: dict[str, object] = {
            "sessionId": hosted.id,
            "sourceId": hosted.source_id,
            "incorrectCount": summary.incorrect_count,
        }
        if summary.kind == SessionKind.MCQ.value:
            details["performance"] = mcq_session.performance_label(summary.score_percent)
        if summary.kind == SessionKind.WRITTEN.value:
            details["totalPoints"] = written_session.total_points(hosted.state)
            details["answeredPoints"] = written_session.answered_points(hosted.state)
        store.record(
            title=hosted.title,
            subject=hosted.subject,
            difficulty=hosted.difficulty,
            summary=summary,
            details=details,
        )

    return _record


_registry = SessionRegistry(on_complete=results_recorder(get_results_store()))


def get_session_registry() -> SessionRegistry:
    """Dependency returning the process-wide session registry."""
    return _registry
