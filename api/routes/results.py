"""Study result endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from api.models import GradeRequest, ResultPeriod
from api.services.results_service import (
    ResultsStore,
    get_results_store,
    overview,
    score_badge,
)
from api.utils import validate_id
from serialization import serialize_result

router = APIRouter(prefix="/api/results", tags=["results"])

Store = Annotated[ResultsStore, Depends(get_results_store)]


@router.get("")
def list_results(
    store: Store,
    period: ResultPeriod = Query(ResultPeriod.ALL),
    subject: str | None = Query(None),
) -> list[dict[str, object]]:
    """List results, newest first."""
    results = store.list_results(period.value, subject)
    return [serialize_result(result, score_badge(result.score)) for result in results]


@router.get("/overview")
def results_overview(
    store: Store,
    period: ResultPeriod = Query(ResultPeriod.ALL),
    subject: str | None = Query(None),
) -> dict[str, object]:
    """Aggregate statistics for the filtered results."""
    return overview(store.list_results(period.value, subject))


@router.get("/{result_id}")
def get_result(result_id: str, store: Store) -> dict[str, object]:
    """Get a single result."""
    result = store.get(validate_id("resultId", result_id))
    return serialize_result(result, score_badge(result.score))


@router.put("/{result_id}/grade")
def grade_result(
    result_id: str, payload: GradeRequest, store: Store
) -> dict[str, object]:
    """Manually grade a written exam result."""
    result = store.grade(validate_id("resultId", result_id), payload.score)
    return serialize_result(result, score_badge(result.score))
