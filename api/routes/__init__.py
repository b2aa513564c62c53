"""API route modules."""
from api.routes import exams, flashcards, results, sessions

__all__ = ["exams", "flashcards", "results", "sessions"]
