from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_quiz.db.models.questions import Question


class QuestionsRepo:
    @staticmethod
    async def list_all(session: AsyncSession) -> list[Question]:
        stmt = select(Question).order_by(Question.id.asc())
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_by_id(session: AsyncSession, question_id: int) -> Question | None:
        return await session.get(Question, question_id)

    @staticmethod
    async def get_by_id_for_update(session: AsyncSession, question_id: int) -> Question | None:
        stmt = select(Question).where(Question.id == question_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def count(session: AsyncSession) -> int:
        stmt = select(func.count()).select_from(Question)
        result = await session.execute(stmt)
        return int(result.scalar_one())

    @staticmethod
    async def lock_all_ids(session: AsyncSession) -> list[int]:
        stmt = select(Question.id).order_by(Question.id.asc()).with_for_update()
        result = await session.execute(stmt)
        return [int(question_id) for question_id in result.scalars().all()]

    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        question: str,
        options: Sequence[str],
        correct_answer: int,
        explanation: str,
    ) -> Question:
        row = Question(
            question=question,
            options=list(options),
            correct_answer=correct_answer,
            explanation=explanation,
        )
        session.add(row)
        await session.flush()
        return row

    @staticmethod
    async def update(
        session: AsyncSession,
        question_id: int,
        *,
        question: str,
        options: Sequence[str],
        correct_answer: int,
        explanation: str,
        now_utc: datetime,
    ) -> Question | None:
        row = await QuestionsRepo.get_by_id_for_update(session, question_id)
        if row is None:
            return None
        row.question = question
        row.options = list(options)
        row.correct_answer = correct_answer
        row.explanation = explanation
        row.updated_at = now_utc
        await session.flush()
        return row

    @staticmethod
    async def delete_by_id(session: AsyncSession, question_id: int) -> int:
        stmt = delete(Question).where(Question.id == question_id)
        result = await session.execute(stmt)
        return int(getattr(result, "rowcount", 0) or 0)
