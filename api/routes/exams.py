"""Exam template endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends

from api.models import StartExamRequest
from api.services.catalog_service import Catalog, get_catalog
from api.services.session_service import SessionRegistry, get_session_registry
from api.utils import validate_id
from serialization import serialize_exam, serialize_session

router = APIRouter(prefix="/api/exams", tags=["exams"])


@router.get("")
def list_exams(
    catalog: Annotated[Catalog, Depends(get_catalog)],
) -> list[dict[str, object]]:
    """List available exam templates."""
    return [serialize_exam(exam) for exam in catalog.list_exams()]


@router.get("/{exam_id}")
def get_exam(
    exam_id: str,
    catalog: Annotated[Catalog, Depends(get_catalog)],
) -> dict[str, object]:
    """Get a single exam template."""
    exam = catalog.get_exam(validate_id("examId", exam_id))
    return serialize_exam(exam)


@router.post("/{exam_id}/sessions", status_code=201)
def start_exam_session(
    exam_id: str,
    catalog: Annotated[Catalog, Depends(get_catalog)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
    payload: StartExamRequest | None = None,
) -> dict[str, object]:
    """Start an MCQ or written session for an exam; mixed exams default to MCQ."""
    exam = catalog.get_exam(validate_id("examId", exam_id))
    requested = payload.part.value if payload and payload.part else None
    part = catalog.resolve_part(exam, requested)

    if part == "written":
        hosted = registry.start_written(exam, catalog.written_questions_for(exam))
    else:
        hosted = registry.start_mcq(exam, catalog.mcq_questions_for(exam))
    return serialize_session(hosted, registry.elapsed_seconds(hosted))
