"""Service layer for study results (in-memory, nothing survives a restart)."""
import logging
import threading
import uuid
from datetime import datetime, timedelta

from fastapi import HTTPException

from api.models.results import ResultPeriod
from api.utils import utc_now
from core.session_state import SessionSummary
from models import StudyResult

logger = logging.getLogger(__name__)

PERIOD_DAYS = {
    ResultPeriod.WEEK.value: 7,
    ResultPeriod.MONTH.value: 30,
    ResultPeriod.THREE_MONTHS.value: 90,
}


class ResultsStore:
    """Results of completed sessions, newest first."""

    def __init__(self):
        self._results: dict[str, StudyResult] = {}
        self._lock = threading.Lock()

    def record(
        self,
        title: str,
        subject: str,
        difficulty: str,
        summary: SessionSummary,
        details: dict[str, object] | None = None,
        completed_at: datetime | None = None,
    ) -> StudyResult:
        """Store the summary of a finished session."""
        if summary.score_percent is not None:
            score = summary.score_percent
        else:
            score = summary.accuracy_percent

        result = StudyResult(
            id=uuid.uuid4().hex,
            title=title,
            kind=summary.kind,
            subject=subject,
            difficulty=difficulty,
            score=score,
            correct_count=summary.correct_count,
            answered_count=summary.answered_count,
            total_count=summary.total_count,
            time_spent_seconds=summary.time_spent_seconds,
            completed_at=completed_at or utc_now(),
            details=details or {},
        )
        with self._lock:
            self._results[result.id] = result
        logger.info(f"Recorded {result.kind} result {result.id} for '{title}' (score: {score})")
        return result

    def get(self, result_id: str) -> StudyResult:
        with self._lock:
            result = self._results.get(result_id)
        if result is None:
            raise HTTPException(status_code=404, detail="Result not found")
        return result

    def list_results(
        self,
        period: str = ResultPeriod.ALL.value,
        subject: str | None = None,
        now: datetime | None = None,
    ) -> list[StudyResult]:
        """List results, optionally limited to a period and a subject."""
        with self._lock:
            results = list(self._results.values())

        days = PERIOD_DAYS.get(period)
        if days is not None:
            cutoff = (now or utc_now()) - timedelta(days=days)
            results = [r for r in results if r.completed_at >= cutoff]
        if subject and subject != "all":
            results = [r for r in results if r.subject == subject]

        results.sort(key=lambda r: r.completed_at, reverse=True)
        return results

    def grade(self, result_id: str, score: int) -> StudyResult:
        """Apply a manual grade to a written result."""
        result = self.get(result_id)
        if result.kind != "written":
            raise HTTPException(
                status_code=400, detail="Only written results are graded manually"
            )
        with self._lock:
            result.score = score
        logger.info(f"Graded written result {result_id}: {score}")
        return result


def _average(scores: list[int]) -> float:
    return round(sum(scores) / len(scores), 1) if scores else 0


def _averages_by(results: list[StudyResult], key: str) -> dict[str, float]:
    """Average graded score per value of ``key``; groups without grades are left out."""
    grouped: dict[str, list[int]] = {}
    for result in results:
        if result.score is not None:
            grouped.setdefault(getattr(result, key), []).append(result.score)
    return {name: _average(scores) for name, scores in sorted(grouped.items())}


def overview(results: list[StudyResult]) -> dict[str, object]:
    """Aggregate figures for a list of results."""
    graded = [r.score for r in results if r.score is not None]
    by_kind: dict[str, int] = {}
    for result in results:
        by_kind[result.kind] = by_kind.get(result.kind, 0) + 1

    return {
        "totalResults": len(results),
        "gradedResults": len(graded),
        "averageScore": _average(graded),
        "bestScore": max(graded) if graded else None,
        "totalTimeSpentSeconds": sum(r.time_spent_seconds for r in results),
        "subjects": sorted({r.subject for r in results}),
        "byKind": by_kind,
        "subjectAverages": _averages_by(results, "subject"),
        "kindAverages": _averages_by(results, "kind"),
    }


def score_badge(score: int | None) -> str:
    if score is None:
        return "Pending"
    if score >= 90:
        return "Excellent"
    if score >= 80:
        return "Good"
    if score >= 60:
        return "Fair"
    return "Needs Work"


_store = ResultsStore()


def get_results_store() -> ResultsStore:
    """Dependency returning the process-wide results store."""
    return _store
