"""Pydantic models."""
from api.models.catalog import (
    CatalogFile,
    Difficulty,
    ExamTemplateEntry,
    ExamType,
    FlashCardEntry,
    FlashCardSetEntry,
    McqQuestionEntry,
    WrittenQuestionEntry,
)
from api.models.results import GradeRequest, ResultPeriod
from api.models.sessions import (
    AnswerRequest,
    ExamPart,
    FlashcardResponseRequest,
    StartExamRequest,
)

__all__ = [
    "AnswerRequest",
    "CatalogFile",
    "Difficulty",
    "ExamPart",
    "ExamTemplateEntry",
    "ExamType",
    "FlashCardEntry",
    "FlashCardSetEntry",
    "FlashcardResponseRequest",
    "GradeRequest",
    "McqQuestionEntry",
    "ResultPeriod",
    "StartExamRequest",
    "WrittenQuestionEntry",
]
