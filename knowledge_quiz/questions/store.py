from __future__ import annotations

from datetime import datetime, timezone

import structlog

from knowledge_quiz.db.database import Database
from knowledge_quiz.db.models.questions import Question
from knowledge_quiz.db.repo.questions_repo import QuestionsRepo
from knowledge_quiz.questions.errors import LastQuestionDeleteError, QuestionNotFoundError
from knowledge_quiz.questions.types import QuestionFields, QuestionSnapshot

logger = structlog.get_logger(__name__)


def _as_snapshot(row: Question) -> QuestionSnapshot:
    return QuestionSnapshot(
        id=int(row.id),
        question=row.question,
        options=tuple(row.options),  # type: ignore[arg-type]
        correct_answer=int(row.correct_answer),
        explanation=row.explanation,
    )


class QuestionStore:
    """Question persistence on top of an opened ``Database``.

    Every call runs in its own transaction. Rows leave this class as
    immutable ``QuestionSnapshot`` values so no ORM state escapes a session.
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    async def open(self) -> None:
        self._database.open()
        await self._database.ensure_available()
        await self._database.create_schema()

    async def close(self) -> None:
        await self._database.close()

    async def ping(self) -> bool:
        return await self._database.ping()

    async def list_questions(self) -> list[QuestionSnapshot]:
        async with self._database.session() as session:
            rows = await QuestionsRepo.list_all(session)
            return [_as_snapshot(row) for row in rows]

    async def count_questions(self) -> int:
        async with self._database.session() as session:
            return await QuestionsRepo.count(session)

    async def get_question(self, question_id: int) -> QuestionSnapshot:
        async with self._database.session() as session:
            row = await QuestionsRepo.get_by_id(session, question_id)
            if row is None:
                raise QuestionNotFoundError(question_id)
            return _as_snapshot(row)

    async def create_question(self, fields: QuestionFields) -> QuestionSnapshot:
        async with self._database.session() as session:
            row = await QuestionsRepo.create(
                session,
                question=fields.question,
                options=fields.options,
                correct_answer=fields.correct_answer,
                explanation=fields.explanation,
            )
            snapshot = _as_snapshot(row)
        logger.info("question_created", question_id=snapshot.id)
        return snapshot

    async def update_question(self, question_id: int, fields: QuestionFields) -> QuestionSnapshot:
        async with self._database.session() as session:
            row = await QuestionsRepo.update(
                session,
                question_id,
                question=fields.question,
                options=fields.options,
                correct_answer=fields.correct_answer,
                explanation=fields.explanation,
                now_utc=datetime.now(timezone.utc),
            )
            if row is None:
                raise QuestionNotFoundError(question_id)
            snapshot = _as_snapshot(row)
        logger.info("question_updated", question_id=question_id)
        return snapshot

    async def delete_question(self, question_id: int) -> None:
        async with self._database.session() as session:
            # Row locks serialize concurrent deletes, so the count below
            # cannot be stale when the delete runs.
            locked_ids = await QuestionsRepo.lock_all_ids(session)
            if len(locked_ids) <= 1:
                raise LastQuestionDeleteError(question_id)
            if question_id not in locked_ids:
                raise QuestionNotFoundError(question_id)
            await QuestionsRepo.delete_by_id(session, question_id)
        logger.info("question_deleted", question_id=question_id, remaining=len(locked_ids) - 1)
