"""Service layer for exam templates, question banks and flashcard decks."""
import logging
from pathlib import Path

from fastapi import HTTPException
from pydantic import ValidationError

from api.config import CATALOG_PATH
from api.models.catalog import CatalogFile, ExamType
from api.utils import parse_iso_timestamp, read_json_file
from models import ExamTemplate, FlashCard, FlashCardSet, McqQuestion, WrittenQuestion

logger = logging.getLogger(__name__)


class Catalog:
    """In-memory study content, read-only once loaded."""

    def __init__(
        self,
        mcq_questions: dict[str, McqQuestion] | None = None,
        written_questions: dict[str, WrittenQuestion] | None = None,
        exams: dict[str, ExamTemplate] | None = None,
        decks: dict[str, FlashCardSet] | None = None,
    ):
        self.mcq_questions = mcq_questions or {}
        self.written_questions = written_questions or {}
        self.exams = exams or {}
        self.decks = decks or {}

    def list_exams(self) -> list[ExamTemplate]:
        return list(self.exams.values())

    def get_exam(self, exam_id: str) -> ExamTemplate:
        exam = self.exams.get(exam_id)
        if exam is None:
            raise HTTPException(status_code=404, detail="Exam not found")
        return exam

    def resolve_part(self, exam: ExamTemplate, part: str | None) -> str:
        """Pick which part of an exam to run; mixed exams start with MCQ."""
        if exam.exam_type == ExamType.MIXED.value:
            return part or ExamType.MCQ.value
        if part and part != exam.exam_type:
            raise HTTPException(
                status_code=400,
                detail=f"Exam {exam.id} has no {part} part",
            )
        return exam.exam_type

    def mcq_questions_for(self, exam: ExamTemplate) -> list[McqQuestion]:
        return [self.mcq_questions[qid] for qid in exam.mcq_question_ids]

    def written_questions_for(self, exam: ExamTemplate) -> list[WrittenQuestion]:
        return [self.written_questions[qid] for qid in exam.written_question_ids]

    def list_decks(self, search: str | None = None) -> list[FlashCardSet]:
        decks = list(self.decks.values())
        if not search or not search.strip():
            return decks
        needle = search.strip().lower()
        return [
            deck
            for deck in decks
            if needle in deck.title.lower() or needle in deck.subject.lower()
        ]

    def get_deck(self, deck_id: str) -> FlashCardSet:
        deck = self.decks.get(deck_id)
        if deck is None:
            raise HTTPException(status_code=404, detail="Flashcard deck not found")
        return deck


def _has_duplicates(ids: list[str]) -> bool:
    return len(set(ids)) != len(ids)


def build_catalog(raw: object) -> Catalog:
    """Validate raw catalog JSON and convert it to domain objects."""
    data = CatalogFile.model_validate(raw)

    mcq_questions = {
        entry.id: McqQuestion(
            id=entry.id,
            prompt=entry.question,
            options=tuple(entry.options),
            correct_index=entry.correctAnswer,
            explanation=entry.explanation,
        )
        for entry in data.mcqQuestions
    }
    written_questions = {
        entry.id: WrittenQuestion(
            id=entry.id,
            prompt=entry.question,
            points=entry.points,
            expected_length=entry.expectedLength,
            sample_answer=entry.sampleAnswer,
        )
        for entry in data.writtenQuestions
    }

    exams: dict[str, ExamTemplate] = {}
    for entry in data.exams:
        missing = [qid for qid in entry.mcqQuestions if qid not in mcq_questions]
        missing += [qid for qid in entry.writtenQuestions if qid not in written_questions]
        if missing:
            logger.error(f"Skipping exam {entry.id}: unknown questions {missing}")
            continue
        if _has_duplicates(entry.mcqQuestions) or _has_duplicates(entry.writtenQuestions):
            logger.error(f"Skipping exam {entry.id}: duplicate question ids")
            continue
        needs_mcq = entry.type in (ExamType.MCQ, ExamType.MIXED)
        needs_written = entry.type in (ExamType.WRITTEN, ExamType.MIXED)
        if (needs_mcq and not entry.mcqQuestions) or (
            needs_written and not entry.writtenQuestions
        ):
            logger.error(f"Skipping exam {entry.id}: no questions for its {entry.type.value} part")
            continue
        exams[entry.id] = ExamTemplate(
            id=entry.id,
            title=entry.title,
            subject=entry.subject,
            exam_type=entry.type.value,
            duration_minutes=entry.duration,
            difficulty=entry.difficulty.value,
            description=entry.description,
            mcq_question_ids=tuple(entry.mcqQuestions),
            written_question_ids=tuple(entry.writtenQuestions),
        )

    decks: dict[str, FlashCardSet] = {}
    for entry in data.flashcardSets:
        if not entry.cards:
            logger.warning(f"Skipping empty flashcard deck {entry.id}")
            continue
        if _has_duplicates([card.id for card in entry.cards]):
            logger.error(f"Skipping flashcard deck {entry.id}: duplicate card ids")
            continue
        decks[entry.id] = FlashCardSet(
            id=entry.id,
            title=entry.title,
            subject=entry.subject,
            difficulty=entry.difficulty.value,
            description=entry.description,
            created=parse_iso_timestamp(entry.created),
            last_studied=parse_iso_timestamp(entry.lastStudied),
            cards=tuple(
                FlashCard(
                    id=card.id,
                    front=card.front,
                    back=card.back,
                    difficulty=card.difficulty.value,
                    mastered=card.mastered,
                )
                for card in entry.cards
            ),
        )

    return Catalog(mcq_questions, written_questions, exams, decks)


def load_catalog(path: Path) -> Catalog:
    """Load catalog from a JSON file; a missing or invalid file gives an empty catalog."""
    raw = read_json_file(path, None)
    if raw is None:
        logger.warning(f"Catalog file {path} missing or unreadable, starting with no content")
        return Catalog()
    try:
        catalog = build_catalog(raw)
    except ValidationError as e:
        logger.error(f"Invalid catalog file {path}: {e}")
        return Catalog()
    logger.info(
        f"Loaded catalog from {path}: {len(catalog.exams)} exams, "
        f"{len(catalog.decks)} flashcard decks"
    )
    return catalog


_catalog: Catalog | None = None


def get_catalog() -> Catalog:
    """Dependency returning the process-wide catalog, loaded on first use."""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog(CATALOG_PATH)
    return _catalog
