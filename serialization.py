from __future__ import annotations

from typing import Any

from api.utils import format_clock
from core import flashcard_session, mcq_session, written_session
from core.session_state import SessionSummary
from models import (
    ExamTemplate,
    FlashCard,
    FlashCardSet,
    McqQuestion,
    StudyResult,
    WrittenQuestion,
)


def _iso(value) -> str | None:
    return value.isoformat() if value is not None else None


def serialize_exam(exam: ExamTemplate) -> dict[str, Any]:
    question_count = len(exam.mcq_question_ids) + len(exam.written_question_ids)
    return {
        "id": exam.id,
        "title": exam.title,
        "subject": exam.subject,
        "type": exam.exam_type,
        "duration": exam.duration_minutes,
        "questionCount": question_count,
        "difficulty": exam.difficulty,
        "description": exam.description,
    }


def serialize_card(card: FlashCard) -> dict[str, Any]:
    return {
        "id": card.id,
        "front": card.front,
        "back": card.back,
        "difficulty": card.difficulty,
        "mastered": card.mastered,
    }


def serialize_deck(deck: FlashCardSet, include_cards: bool = False) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": deck.id,
        "title": deck.title,
        "subject": deck.subject,
        "cardCount": len(deck.cards),
        "masteredCards": sum(1 for card in deck.cards if card.mastered),
        "difficulty": deck.difficulty,
        "description": deck.description,
        "created": _iso(deck.created),
        "lastStudied": _iso(deck.last_studied),
    }
    if include_cards:
        payload["cards"] = [serialize_card(card) for card in deck.cards]
    return payload


def _mcq_question(question: McqQuestion, reveal: bool) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": question.id,
        "question": question.prompt,
        "options": list(question.options),
    }
    if reveal:
        payload["correctAnswer"] = question.correct_index
        payload["explanation"] = question.explanation
    return payload


def _written_question(question: WrittenQuestion, reveal: bool) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": question.id,
        "question": question.prompt,
        "points": question.points,
        "expectedLength": question.expected_length,
    }
    if reveal and question.sample_answer:
        payload["sampleAnswer"] = question.sample_answer
    return payload


def _mcq_view(state: mcq_session.McqSessionState) -> dict[str, Any]:
    question = mcq_session.current_question(state)
    return {
        "question": _mcq_question(question, reveal=state.completed),
        "selectedOption": state.responses.get(question.id),
        "answers": dict(state.responses),
        "answeredCount": mcq_session.answered_count(state),
        "remainingSeconds": state.remaining_seconds,
        "timeLeftDisplay": format_clock(state.remaining_seconds),
    }


def _written_view(state: written_session.WrittenSessionState) -> dict[str, Any]:
    question = written_session.current_question(state)
    answer = state.responses.get(question.id, "")
    return {
        "question": _written_question(question, reveal=state.completed),
        "answer": answer,
        "wordCount": written_session.word_count(answer),
        "answeredCount": written_session.answered_count(state),
        "totalPoints": written_session.total_points(state),
        "saved": written_session.saved_indicator_visible(state),
        "remainingSeconds": state.remaining_seconds,
        "timeLeftDisplay": format_clock(state.remaining_seconds),
    }


def _flashcard_view(state: flashcard_session.FlashcardSessionState) -> dict[str, Any]:
    card = flashcard_session.current_card(state)
    card_payload = {
        "id": card.id,
        "front": card.front,
        "difficulty": card.difficulty,
        "mastered": card.mastered,
    }
    if state.flipped:
        card_payload["back"] = card.back
    return {
        "card": card_payload,
        "flipped": state.flipped,
        "studiedCount": len(state.studied),
        "correctCount": len(state.correct),
        "incorrectCount": len(state.incorrect),
        "progress": flashcard_session.progress_percent(state),
    }


def serialize_session(hosted, elapsed_seconds: int) -> dict[str, Any]:
    """Current view of a hosted session; correct answers stay hidden until completion."""
    state = hosted.state
    payload: dict[str, Any] = {
        "id": hosted.id,
        "kind": hosted.kind,
        "sourceId": hosted.source_id,
        "title": hosted.title,
        "subject": hosted.subject,
        "status": state.status.value,
        "completed": state.completed,
        "currentIndex": state.cursor,
        "itemCount": len(state.items),
        "elapsedSeconds": elapsed_seconds,
    }
    if hosted.kind == mcq_session.KIND:
        payload.update(_mcq_view(state))
    elif hosted.kind == written_session.KIND:
        payload.update(_written_view(state))
    else:
        payload.update(_flashcard_view(state))
    return payload


def serialize_summary(summary: SessionSummary) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "kind": summary.kind,
        "correctCount": summary.correct_count,
        "incorrectCount": summary.incorrect_count,
        "answeredCount": summary.answered_count,
        "totalCount": summary.total_count,
        "timeSpentSeconds": summary.time_spent_seconds,
    }
    if summary.score_percent is not None:
        payload["scorePercent"] = summary.score_percent
        payload["performance"] = mcq_session.performance_label(summary.score_percent)
    if summary.accuracy_percent is not None:
        payload["accuracyPercent"] = summary.accuracy_percent
    return payload


def serialize_review(reviews: list[mcq_session.QuestionReview]) -> list[dict[str, Any]]:
    return [
        {
            **_mcq_question(review.question, reveal=True),
            "selectedOption": review.selected_index,
            "answered": review.answered,
            "isCorrect": review.is_correct,
        }
        for review in reviews
    ]


def serialize_written_answers(
    state: written_session.WrittenSessionState,
) -> list[dict[str, Any]]:
    answers = []
    for question in state.items:
        text = state.responses.get(question.id, "")
        answers.append(
            {
                **_written_question(question, reveal=True),
                "answer": text,
                "answered": written_session.is_answered(text),
                "wordCount": written_session.word_count(text),
            }
        )
    return answers


def serialize_result(result: StudyResult, badge: str) -> dict[str, Any]:
    return {
        "id": result.id,
        "title": result.title,
        "type": result.kind,
        "subject": result.subject,
        "difficulty": result.difficulty,
        "score": result.score,
        "maxScore": 100,
        "badge": badge,
        "questionsTotal": result.total_count,
        "questionsAnswered": result.answered_count,
        "questionsCorrect": result.correct_count,
        "timeSpentSeconds": result.time_spent_seconds,
        "date": result.completed_at.isoformat(),
        "details": result.details,
    }
