"""Session-related Pydantic models."""
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class ExamPart(str, Enum):
    """Which part of an exam to run."""

    MCQ = "mcq"
    WRITTEN = "written"


class StartExamRequest(BaseModel):
    """Model for starting an exam session."""

    part: ExamPart | None = None


class AnswerRequest(BaseModel):
    """Model for answering the question with the given id.

    MCQ sessions take ``optionIndex``, written sessions take ``text``.
    """

    questionId: str = Field(..., min_length=1)
    optionIndex: int | None = None
    text: str | None = None

    @model_validator(mode="after")
    def check_one_answer(self) -> "AnswerRequest":
        if (self.optionIndex is None) == (self.text is None):
            raise ValueError("Provide exactly one of optionIndex or text")
        return self


class FlashcardResponseRequest(BaseModel):
    """Model for marking the current flashcard."""

    correct: bool
