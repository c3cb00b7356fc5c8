from __future__ import annotations

import asyncio

from knowledge_quiz.core.config import get_settings
from knowledge_quiz.core.logging import configure_logging
from knowledge_quiz.main import build_question_store
from knowledge_quiz.questions.seed import seed_if_empty


async def _run() -> int:
    store = build_question_store(get_settings())
    await store.open()
    try:
        inserted = await seed_if_empty(store)
        total = await store.count_questions()
    finally:
        await store.close()

    print(f"seed_questions inserted={inserted} total={total}")  # noqa: T201
    return 0


def main() -> int:
    configure_logging(get_settings().log_level)
    return asyncio.run(_run())


if __name__ == "__main__":
    raise SystemExit(main())
