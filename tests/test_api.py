import pytest
from fastapi.testclient import TestClient

from api.app import app
from api.services.catalog_service import build_catalog, get_catalog
from api.services.results_service import ResultsStore, get_results_store
from api.services.session_service import (
    SessionRegistry,
    get_session_registry,
    results_recorder,
)

CATALOG = {
    "mcqQuestions": [
        {"id": "q1", "question": "Stack order?", "options": ["FIFO", "LIFO"],
         "correctAnswer": 1, "explanation": "Last in, first out"},
        {"id": "q2", "question": "Queue order?", "options": ["FIFO", "LIFO"],
         "correctAnswer": 0},
    ],
    "writtenQuestions": [
        {"id": "w1", "question": "Explain deadlocks", "points": 15},
        {"id": "w2", "question": "Explain paging", "points": 10},
    ],
    "exams": [
        {"id": "ds", "title": "Data Structures", "subject": "Computer Science",
         "type": "mcq", "duration": 10, "mcqQuestions": ["q1", "q2"]},
        {"id": "os", "title": "Operating Systems", "subject": "Systems",
         "type": "written", "duration": 60, "writtenQuestions": ["w1", "w2"]},
    ],
    "flashcardSets": [
        {"id": "net", "title": "Network Protocols", "subject": "Networks",
         "cards": [
             {"id": "c1", "front": "DNS?", "back": "Names to addresses"},
             {"id": "c2", "front": "TCP?", "back": "Reliable stream"},
         ]},
    ],
}


@pytest.fixture
def store() -> ResultsStore:
    return ResultsStore()


@pytest.fixture
def client(store: ResultsStore):
    catalog = build_catalog(CATALOG)
    registry = SessionRegistry(on_complete=results_recorder(store))
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_session_registry] = lambda: registry
    app.dependency_overrides[get_results_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client: TestClient) -> None:
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "activeSessions": 0}


def test_list_exams_and_decks(client: TestClient) -> None:
    exams = client.get("/api/exams").json()
    assert [exam["id"] for exam in exams] == ["ds", "os"]
    assert exams[0]["questionCount"] == 2

    decks = client.get("/api/flashcards/decks", params={"search": "network"}).json()
    assert [deck["id"] for deck in decks] == ["net"]
    deck = client.get("/api/flashcards/decks/net").json()
    assert len(deck["cards"]) == 2

    assert client.get("/api/exams/unknown").status_code == 404


def test_mcq_session_flow(client: TestClient, store: ResultsStore) -> None:
    response = client.post("/api/exams/ds/sessions")
    assert response.status_code == 201
    session = response.json()
    session_id = session["id"]
    assert session["kind"] == "mcq"
    assert session["remainingSeconds"] == 600
    assert session["timeLeftDisplay"] == "10:00"
    assert "correctAnswer" not in session["question"]

    base = f"/api/sessions/{session_id}"
    view = client.post(f"{base}/answers", json={"questionId": "q1", "optionIndex": 1}).json()
    assert view["selectedOption"] == 1
    assert client.post(f"{base}/next").json()["currentIndex"] == 1
    assert client.post(f"{base}/next").json()["currentIndex"] == 1

    assert client.get(f"{base}/summary").status_code == 409

    submitted = client.post(f"{base}/submit").json()
    assert submitted["completed"] is True
    assert submitted["status"] == "completed"

    summary = client.get(f"{base}/summary").json()
    assert summary["scorePercent"] == 50
    assert summary["correctCount"] == 1
    assert summary["performance"] == "Needs Improvement"

    review = client.get(f"{base}/review").json()
    assert [item["isCorrect"] for item in review] == [True, False]
    assert review[1]["answered"] is False
    assert review[0]["explanation"] == "Last in, first out"

    late = client.post(f"{base}/answers", json={"questionId": "q2", "optionIndex": 0})
    assert late.status_code == 409

    results = store.list_results()
    assert len(results) == 1
    assert results[0].score == 50


def test_mcq_answer_errors(client: TestClient) -> None:
    session_id = client.post("/api/exams/ds/sessions").json()["id"]
    base = f"/api/sessions/{session_id}"

    unknown = client.post(f"{base}/answers", json={"questionId": "zz", "optionIndex": 0})
    assert unknown.status_code == 404
    out_of_range = client.post(f"{base}/answers", json={"questionId": "q1", "optionIndex": 5})
    assert out_of_range.status_code == 409
    missing = client.post(f"{base}/answers", json={"questionId": "q1", "text": "LIFO"})
    assert missing.status_code == 400
    both = client.post(
        f"{base}/answers", json={"questionId": "q1", "optionIndex": 1, "text": "LIFO"}
    )
    assert both.status_code == 422
    assert client.post(f"{base}/flip").status_code == 400


def test_written_session_flow(client: TestClient) -> None:
    session = client.post("/api/exams/os/sessions").json()
    assert session["kind"] == "written"
    assert session["totalPoints"] == 25
    base = f"/api/sessions/{session['id']}"

    view = client.post(
        f"{base}/answers", json={"questionId": "w1", "text": "Circular wait on locks"}
    ).json()
    assert view["answer"] == "Circular wait on locks"
    assert view["wordCount"] == 4
    assert view["answeredCount"] == 1

    assert client.get(f"{base}/review").status_code == 409
    client.post(f"{base}/submit")

    answers = client.get(f"{base}/review").json()
    assert [a["answered"] for a in answers] == [True, False]
    summary = client.get(f"{base}/summary").json()
    assert summary["answeredCount"] == 1
    assert "scorePercent" not in summary


def test_start_exam_with_wrong_part(client: TestClient) -> None:
    response = client.post("/api/exams/ds/sessions", json={"part": "written"})
    assert response.status_code == 400


def test_flashcard_session_flow(client: TestClient) -> None:
    session = client.post("/api/flashcards/decks/net/sessions").json()
    assert session["kind"] == "flashcard"
    assert "back" not in session["card"]
    base = f"/api/sessions/{session['id']}"

    assert client.post(f"{base}/respond", json={"correct": True}).status_code == 409

    flipped = client.post(f"{base}/flip").json()
    assert flipped["card"]["back"] == "Names to addresses"
    view = client.post(f"{base}/respond", json={"correct": True}).json()
    assert view["currentIndex"] == 1
    assert view["flipped"] is False
    assert view["progress"] == 50

    client.post(f"{base}/flip")
    done = client.post(f"{base}/respond", json={"correct": False}).json()
    assert done["completed"] is True
    assert done["progress"] == 100

    summary = client.get(f"{base}/summary").json()
    assert summary["accuracyPercent"] == 50
    assert client.post(f"{base}/submit").status_code == 400

    restarted = client.post(f"{base}/restart").json()
    assert restarted["completed"] is False
    assert restarted["currentIndex"] == 0
    assert restarted["studiedCount"] == 0


def test_leave_session(client: TestClient) -> None:
    session_id = client.post("/api/exams/ds/sessions").json()["id"]
    left = client.delete(f"/api/sessions/{session_id}").json()
    assert left == {"status": "discarded", "sessionId": session_id, "completed": False}
    assert client.get(f"/api/sessions/{session_id}").status_code == 404


def test_results_endpoints(client: TestClient) -> None:
    session_id = client.post("/api/exams/os/sessions").json()["id"]
    client.post(f"/api/sessions/{session_id}/submit")
    session_id = client.post("/api/exams/ds/sessions").json()["id"]
    base = f"/api/sessions/{session_id}"
    client.post(f"{base}/answers", json={"questionId": "q1", "optionIndex": 1})
    client.post(f"{base}/answers", json={"questionId": "q2", "optionIndex": 0})
    client.post(f"{base}/submit")

    results = client.get("/api/results", params={"period": "week"}).json()
    by_type = {r["type"]: r for r in results}
    assert set(by_type) == {"mcq", "written"}
    assert by_type["mcq"]["badge"] == "Excellent"
    written = by_type["written"]
    assert written["score"] is None
    assert written["badge"] == "Pending"

    graded = client.put(f"/api/results/{written['id']}/grade", json={"score": 70}).json()
    assert graded["score"] == 70
    assert graded["badge"] == "Fair"
    assert client.put(
        f"/api/results/{by_type['mcq']['id']}/grade", json={"score": 70}
    ).status_code == 400
    assert client.put(
        f"/api/results/{written['id']}/grade", json={"score": 101}
    ).status_code == 422

    stats = client.get("/api/results/overview", params={"subject": "Systems"}).json()
    assert stats["totalResults"] == 1
    assert stats["averageScore"] == 70.0
    assert client.get("/api/results/missing").status_code == 404
