from __future__ import annotations

from typing import Protocol

import structlog

from knowledge_quiz.questions.types import QuestionFields, QuestionSnapshot

logger = structlog.get_logger(__name__)

SAMPLE_QUESTIONS: tuple[QuestionFields, ...] = (
    QuestionFields(
        question="What is the capital of France?",
        options=("London", "Berlin", "Paris", "Madrid"),
        correct_answer=2,
        explanation="Paris has been the capital of France since the 12th century.",
    ),
    QuestionFields(
        question="Which planet is known as the Red Planet?",
        options=("Venus", "Mars", "Jupiter", "Saturn"),
        correct_answer=1,
        explanation="Mars appears red due to iron oxide (rust) on its surface.",
    ),
    QuestionFields(
        question="What is the largest mammal in the world?",
        options=("African Elephant", "Blue Whale", "Giraffe", "Polar Bear"),
        correct_answer=1,
        explanation="The Blue Whale can grow up to 100 feet long and weigh 200 tons.",
    ),
)


class _SeedableStore(Protocol):
    async def count_questions(self) -> int: ...

    async def create_question(self, fields: QuestionFields) -> QuestionSnapshot: ...


async def seed_if_empty(store: _SeedableStore) -> int:
    """Insert the sample questions into an empty store. Returns rows inserted."""
    existing = await store.count_questions()
    if existing > 0:
        logger.info("question_seed_skipped", existing=existing)
        return 0

    for fields in SAMPLE_QUESTIONS:
        await store.create_question(fields)
    logger.info("question_seed_inserted", inserted=len(SAMPLE_QUESTIONS))
    return len(SAMPLE_QUESTIONS)
