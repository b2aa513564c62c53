import json
from pathlib import Path

import pytest
from fastapi import HTTPException

from api.services import catalog_service

CATALOG = {
    "mcqQuestions": [
        {"id": "q1", "question": "Q1", "options": ["a", "b"], "correctAnswer": 1},
        {"id": "q2", "question": "Q2", "options": ["a", "b", "c"], "correctAnswer": 0},
    ],
    "writtenQuestions": [
        {"id": "w1", "question": "Explain", "points": 10, "expectedLength": "100 words"},
    ],
    "exams": [
        {"id": "mcq", "title": "MCQ", "subject": "Algorithms", "type": "mcq",
         "duration": 10, "mcqQuestions": ["q1", "q2"]},
        {"id": "mixed", "title": "Mixed", "subject": "Systems", "type": "mixed",
         "duration": 30, "mcqQuestions": ["q2"], "writtenQuestions": ["w1"]},
        {"id": "broken", "title": "Broken", "subject": "X", "type": "mcq",
         "duration": 10, "mcqQuestions": ["missing"]},
    ],
    "flashcardSets": [
        {"id": "ds", "title": "Data Structures", "subject": "Computer Science",
         "created": "2024-01-10T00:00:00Z",
         "cards": [
             {"id": "c1", "front": "Stack?", "back": "LIFO", "mastered": True},
             {"id": "c2", "front": "Queue?", "back": "FIFO"},
         ]},
        {"id": "net", "title": "Network Protocols", "subject": "Networks",
         "cards": [{"id": "c1", "front": "DNS?", "back": "Names to IPs"}]},
        {"id": "empty", "title": "Empty", "subject": "None", "cards": []},
    ],
}


@pytest.fixture
def catalog() -> catalog_service.Catalog:
    return catalog_service.build_catalog(CATALOG)


def test_build_catalog_skips_invalid_entries(catalog: catalog_service.Catalog) -> None:
    assert [exam.id for exam in catalog.list_exams()] == ["mcq", "mixed"]
    assert set(catalog.decks) == {"ds", "net"}
    deck = catalog.get_deck("ds")
    assert deck.created is not None
    assert deck.cards[0].mastered is True


def test_exam_questions(catalog: catalog_service.Catalog) -> None:
    exam = catalog.get_exam("mcq")
    assert exam.duration_minutes == 10
    questions = catalog.mcq_questions_for(exam)
    assert [q.id for q in questions] == ["q1", "q2"]
    assert questions[0].options == ("a", "b")
    assert questions[0].correct_index == 1


def test_resolve_part(catalog: catalog_service.Catalog) -> None:
    mixed = catalog.get_exam("mixed")
    assert catalog.resolve_part(mixed, None) == "mcq"
    assert catalog.resolve_part(mixed, "written") == "written"
    mcq = catalog.get_exam("mcq")
    assert catalog.resolve_part(mcq, None) == "mcq"
    with pytest.raises(HTTPException):
        catalog.resolve_part(mcq, "written")


def test_deck_search(catalog: catalog_service.Catalog) -> None:
    assert [d.id for d in catalog.list_decks("network")] == ["net"]
    assert [d.id for d in catalog.list_decks("COMPUTER")] == ["ds"]
    assert len(catalog.list_decks("  ")) == 2


def test_unknown_ids(catalog: catalog_service.Catalog) -> None:
    with pytest.raises(HTTPException):
        catalog.get_exam("nope")
    with pytest.raises(HTTPException):
        catalog.get_deck("nope")


def test_correct_answer_out_of_range_is_rejected(tmp_path: Path) -> None:
    broken = {"mcqQuestions": [{"id": "q", "question": "?", "options": ["a", "b"], "correctAnswer": 5}]}
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(broken), encoding="utf-8")
    catalog = catalog_service.load_catalog(path)
    assert catalog.mcq_questions == {}


def test_load_catalog_missing_file(tmp_path: Path) -> None:
    catalog = catalog_service.load_catalog(tmp_path / "missing.json")
    assert catalog.list_exams() == []
    assert catalog.list_decks() == []


def test_bundled_catalog_loads() -> None:
    path = Path(__file__).resolve().parent.parent / "data" / "catalog.json"
    catalog = catalog_service.load_catalog(path)
    assert len(catalog.list_exams()) == 4
    assert catalog.get_exam("operating-systems").exam_type == "mixed"
    assert len(catalog.get_deck("data-structures").cards) == 5
