"""Result-related Pydantic models."""
from enum import Enum

from pydantic import BaseModel, Field


class ResultPeriod(str, Enum):
    """Time window for result listings."""

    ALL = "all"
    WEEK = "week"
    MONTH = "month"
    THREE_MONTHS = "3months"


class GradeRequest(BaseModel):
    """Model for manually grading a written result."""

    score: int = Field(..., ge=0, le=100)
