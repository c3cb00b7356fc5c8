from __future__ import annotations

import pytest
from sqlalchemy import text

from knowledge_quiz.core.config import get_settings
from knowledge_quiz.core.integration_target import inspect_integration_target
from knowledge_quiz.db.database import Database
from knowledge_quiz.questions.store import QuestionStore

TRUNCATE_SQL = "TRUNCATE TABLE questions RESTART IDENTITY"


@pytest.fixture
async def database() -> Database:
    database_url = get_settings().resolved_database_url
    target = inspect_integration_target(database_url)
    if not target.is_usable:
        pytest.skip(f"integration database rejected: {'; '.join(target.problems)}")

    db = Database(database_url, pool_size=4)
    db.open()
    if not await db.ping():  # pragma: no cover - environment-dependent
        await db.close()
        pytest.skip("Postgres is required for integration tests")

    await db.create_schema()
    async with db.engine.begin() as conn:
        await conn.execute(text(TRUNCATE_SQL))

    yield db

    await db.close()


@pytest.fixture
def question_store(database: Database) -> QuestionStore:
    return QuestionStore(database)
