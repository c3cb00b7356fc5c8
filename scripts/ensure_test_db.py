"""Prepare the local integration-test database.

Creates the database named by ``DATABASE_URL`` (or the ``DB_*`` settings)
when it is missing, then opens a ``QuestionStore`` against it so the
``questions`` table exists before ``pytest tests/integration`` runs.
"""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence

import asyncpg

from knowledge_quiz.core.config import get_settings
from knowledge_quiz.core.integration_target import IntegrationTarget, require_integration_target
from knowledge_quiz.core.logging import configure_logging
from knowledge_quiz.db.database import Database
from knowledge_quiz.questions.seed import seed_if_empty
from knowledge_quiz.questions.store import QuestionStore


async def create_database_if_missing(target: IntegrationTarget) -> bool:
    conn = await asyncpg.connect(
        host=target.host,
        port=target.port,
        user=target.url.username,
        password=target.url.password,
        database="postgres",
    )
    try:
        if await conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", target.database_name):
            return False
        # Identifiers cannot be bound as parameters; the name is checked to be a plain identifier.
        await conn.execute(f'CREATE DATABASE "{target.database_name}"')
        return True
    finally:
        await conn.close()


async def prepare_test_database(database_url: str, *, seed: bool = False) -> str:
    target = require_integration_target(database_url)
    created = await create_database_if_missing(target)

    store = QuestionStore(Database(database_url, pool_size=1))
    await store.open()
    try:
        inserted = await seed_if_empty(store) if seed else 0
        total = await store.count_questions()
    finally:
        await store.close()

    state = "created" if created else "exists"
    return f"ensure_test_db: {state} {target.describe()} questions={total} seeded={inserted}"


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the integration-test database and its schema.")
    parser.add_argument("--seed", action="store_true", help="insert the sample questions into an empty table")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)
    print(asyncio.run(prepare_test_database(settings.resolved_database_url, seed=args.seed)))  # noqa: T201
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
