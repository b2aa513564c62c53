from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Tuple


@dataclass(frozen=True)
class McqQuestion:
    id: str
    prompt: str
    options: Tuple[str, ...]
    correct_index: int
    explanation: str = ""


@dataclass(frozen=True)
class WrittenQuestion:
    id: str
    prompt: str
    points: int
    expected_length: str = ""
    sample_answer: str | None = None


@dataclass(frozen=True)
class FlashCard:
    id: str
    front: str
    back: str
    difficulty: str = "medium"  # "easy" | "medium" | "hard"
    mastered: bool = False


@dataclass(frozen=True)
class ExamTemplate:
    id: str
    title: str
    subject: str
    exam_type: str  # "mcq" | "written" | "mixed"
    duration_minutes: int
    difficulty: str = "medium"
    description: str = ""
    mcq_question_ids: Tuple[str, ...] = ()
    written_question_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FlashCardSet:
    id: str
    title: str
    subject: str
    cards: Tuple[FlashCard, ...]
    difficulty: str = "medium"
    description: str = ""
    created: datetime | None = None
    last_studied: datetime | None = None


@dataclass
class StudyResult:
    id: str
    title: str
    kind: str  # "mcq" | "written" | "flashcard"
    subject: str
    difficulty: str
    score: int | None
    correct_count: int
    answered_count: int
    total_count: int
    time_spent_seconds: int
    completed_at: datetime
    details: dict[str, object] = field(default_factory=dict)
