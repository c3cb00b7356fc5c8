from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from knowledge_quiz import main as app_main
from knowledge_quiz.api.routes import health as health_routes
from knowledge_quiz.db.database import DatabaseUnavailableError
from tests.question_store_fixtures import InMemoryQuestionStore, seeded_store


def test_health_ok_when_database_reachable() -> None:
    client = TestClient(app_main.create_app(question_store=seeded_store()))

    response = client.get("/api/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "OK"
    assert payload["database"] == "Connected"
    assert payload["timestamp"]


def test_health_returns_500_when_database_unreachable() -> None:
    client = TestClient(app_main.create_app(question_store=InMemoryQuestionStore(reachable=False)))

    response = client.get("/api/health")

    assert response.status_code == 500
    assert response.json() == {
        "status": "Error",
        "database": "Disconnected",
        "error": "Could not connect to database",
    }


async def test_database_check_swallows_ping_exception() -> None:
    class _BrokenStore:
        async def ping(self) -> bool:
            raise RuntimeError("password=secret")

    assert await health_routes._check_database(_BrokenStore()) is False


def test_root_lists_endpoints() -> None:
    client = TestClient(app_main.create_app(question_store=seeded_store()))

    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["endpoints"]["questions"] == "/api/questions"


def test_lifespan_opens_seeds_and_closes_store() -> None:
    store = InMemoryQuestionStore()

    with TestClient(app_main.create_app(question_store=store)) as client:
        assert store.opened is True
        response = client.get("/api/questions")
        assert [item["question"] for item in response.json()] == [
            "What is the capital of France?",
            "Which planet is known as the Red Planet?",
            "What is the largest mammal in the world?",
        ]

    assert store.closed is True


def test_lifespan_does_not_reseed_non_empty_store() -> None:
    store = seeded_store(count=1)

    with TestClient(app_main.create_app(question_store=store)):
        pass

    assert len(store.rows) == 1


def test_startup_fails_when_database_unreachable() -> None:
    class _UnreachableStore(InMemoryQuestionStore):
        async def open(self) -> None:
            raise DatabaseUnavailableError("database is unreachable")

    app = app_main.create_app(question_store=_UnreachableStore())

    with pytest.raises(DatabaseUnavailableError):
        with TestClient(app):
            pass
