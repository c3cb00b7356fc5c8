from __future__ import annotations

import asyncio

import pytest

from knowledge_quiz.questions.errors import LastQuestionDeleteError, QuestionNotFoundError
from knowledge_quiz.questions.seed import SAMPLE_QUESTIONS, seed_if_empty
from knowledge_quiz.questions.store import QuestionStore
from knowledge_quiz.questions.types import QuestionFields

EDITED = QuestionFields(
    question="Which gas do plants absorb?",
    options=("Oxygen", "Nitrogen", "Carbon dioxide", "Helium"),
    correct_answer=2,
    explanation="Photosynthesis consumes CO2.",
)


async def test_seed_then_list_returns_sample_questions_in_id_order(question_store: QuestionStore) -> None:
    assert await seed_if_empty(question_store) == 3
    assert await seed_if_empty(question_store) == 0

    questions = await question_store.list_questions()

    assert [question.id for question in questions] == [1, 2, 3]
    assert [question.fields for question in questions] == list(SAMPLE_QUESTIONS)


async def test_create_get_update_round_trip(question_store: QuestionStore) -> None:
    created = await question_store.create_question(SAMPLE_QUESTIONS[0])
    assert (await question_store.get_question(created.id)).fields == SAMPLE_QUESTIONS[0]

    updated = await question_store.update_question(created.id, EDITED)

    assert updated.id == created.id
    assert (await question_store.get_question(created.id)).fields == EDITED


async def test_missing_rows_raise_not_found(question_store: QuestionStore) -> None:
    await seed_if_empty(question_store)

    with pytest.raises(QuestionNotFoundError):
        await question_store.get_question(404)
    with pytest.raises(QuestionNotFoundError):
        await question_store.update_question(404, EDITED)
    with pytest.raises(QuestionNotFoundError):
        await question_store.delete_question(404)


async def test_delete_reduces_count_and_refuses_last_row(question_store: QuestionStore) -> None:
    await seed_if_empty(question_store)

    await question_store.delete_question(1)
    await question_store.delete_question(2)
    assert await question_store.count_questions() == 1

    with pytest.raises(LastQuestionDeleteError):
        await question_store.delete_question(3)
    assert await question_store.count_questions() == 1


async def test_concurrent_deletes_of_last_two_rows_keep_one(question_store: QuestionStore) -> None:
    first = await question_store.create_question(SAMPLE_QUESTIONS[0])
    second = await question_store.create_question(SAMPLE_QUESTIONS[1])

    results = await asyncio.gather(
        question_store.delete_question(first.id),
        question_store.delete_question(second.id),
        return_exceptions=True,
    )

    refused = [result for result in results if isinstance(result, LastQuestionDeleteError)]
    assert len(refused) == 1
    assert await question_store.count_questions() == 1
