from datetime import datetime, timedelta

import mongomock
import pytest

from quiz_backend.database import ensure_indexes
from quiz_backend.main import create_app
from quiz_backend.repositories import QuizRepository, SubmissionRepository
from quiz_backend.services.quiz_service import QuizService


# ============================================================================
# STORE & CLOCK
# ============================================================================

class FakeClock:
    """Settable stand-in for ``utcnow`` so tests can move past a quiz's end time."""

    def __init__(self, now=None):
        self.now = now or datetime(2026, 3, 1, 9, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def db():
    """Fresh in-memory MongoDB database for each test."""
    database = mongomock.MongoClient()["quiz_test"]
    ensure_indexes(database)
    return database


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(db, clock):
    return QuizService(QuizRepository(db), SubmissionRepository(db), clock=clock)


@pytest.fixture
def two_question_payload():
    return [
        {"text": "2 + 2 = ?", "options": ["4", "5", "22"], "correctIndex": 0},
        {"text": "Capital of France?", "options": ["Berlin", "Paris"], "correctIndex": 1},
    ]


# ============================================================================
# FLASK APP & TEST CLIENT
# ============================================================================

@pytest.fixture
def app(db):
    app = create_app(db=db, overrides={
        "TESTING": True,
        "JWT_SECRET_KEY": "test-secret-key-that-is-long-enough-for-hs256",
        "BCRYPT_LOG_ROUNDS": 4,
    })
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


def register_and_login(client, name="Asha Creator", email="asha@example.com", password="secret123"):
    client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    res = client.post("/api/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.get_json()
    return {"Authorization": f"Bearer {res.get_json()['token']}"}


@pytest.fixture
def auth_headers(client):
    return register_and_login(client)


@pytest.fixture
def other_auth_headers(client):
    return register_and_login(client, name="Ravi Other", email="ravi@example.com", password="hunter22")


@pytest.fixture
def created_quiz(client, auth_headers, two_question_payload):
    res = client.post("/api/quiz/create", headers=auth_headers, json={
        "title": "General Knowledge",
        "description": "Warm-up round",
        "duration": 600,
        "questions": two_question_payload,
    })
    assert res.status_code == 200, res.get_json()
    return res.get_json()


@pytest.fixture
def live_quiz(client, auth_headers, created_quiz):
    res = client.post(f"/api/quiz/start/{created_quiz['code']}", headers=auth_headers)
    assert res.status_code == 200, res.get_json()
    return created_quiz
