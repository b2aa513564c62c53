"""Pydantic models for the content catalog file."""
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class ExamType(str, Enum):
    """Kind of exam template."""

    MCQ = "mcq"
    WRITTEN = "written"
    MIXED = "mixed"


class Difficulty(str, Enum):
    """Difficulty tag shared by exams, decks and cards."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class McqQuestionEntry(BaseModel):
    """Multiple-choice question as stored in the catalog."""

    id: str = Field(..., min_length=1)
    question: str
    options: list[str] = Field(..., min_length=2)
    correctAnswer: int
    explanation: str = ""

    @model_validator(mode="after")
    def check_correct_answer(self) -> "McqQuestionEntry":
        if not 0 <= self.correctAnswer < len(self.options):
            raise ValueError(f"correctAnswer out of range for question {self.id}")
        return self


class WrittenQuestionEntry(BaseModel):
    """Written question as stored in the catalog."""

    id: str = Field(..., min_length=1)
    question: str
    points: int = Field(..., ge=0)
    expectedLength: str = ""
    sampleAnswer: str | None = None


class ExamTemplateEntry(BaseModel):
    """Exam template referencing questions from the banks."""

    id: str = Field(..., min_length=1)
    title: str
    subject: str
    type: ExamType
    duration: int = Field(..., gt=0, description="Duration in minutes")
    difficulty: Difficulty = Difficulty.MEDIUM
    description: str = ""
    mcqQuestions: list[str] = Field(default_factory=list)
    writtenQuestions: list[str] = Field(default_factory=list)


class FlashCardEntry(BaseModel):
    """Single flashcard."""

    id: str = Field(..., min_length=1)
    front: str
    back: str
    difficulty: Difficulty = Difficulty.MEDIUM
    mastered: bool = False


class FlashCardSetEntry(BaseModel):
    """Flashcard deck with its cards."""

    id: str = Field(..., min_length=1)
    title: str
    subject: str
    difficulty: Difficulty = Difficulty.MEDIUM
    description: str = ""
    created: str | None = None
    lastStudied: str | None = None
    cards: list[FlashCardEntry] = Field(default_factory=list)


class CatalogFile(BaseModel):
    """Top-level structure of the catalog JSON."""

    mcqQuestions: list[McqQuestionEntry] = Field(default_factory=list)
    writtenQuestions: list[WrittenQuestionEntry] = Field(default_factory=list)
    exams: list[ExamTemplateEntry] = Field(default_factory=list)
    flashcardSets: list[FlashCardSetEntry] = Field(default_factory=list)
