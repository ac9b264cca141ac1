from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from quizfest.db.models.questions import Question


class QuestionsRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, question_id: UUID) -> Question | None:
        return await session.get(Question, question_id)

    @staticmethod
    async def list_for_quiz(session: AsyncSession, *, quiz_id: UUID) -> list[Question]:
        stmt = (
            select(Question)
            .where(Question.quiz_id == quiz_id)
            .order_by(Question.order_index.asc(), Question.created_at.asc(), Question.id.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_next_order_index(session: AsyncSession, *, quiz_id: UUID) -> int:
        stmt = select(func.max(Question.order_index)).where(Question.quiz_id == quiz_id)
        result = await session.execute(stmt)
        last_order_index = result.scalar_one_or_none()
        if last_order_index is None:
            return 0
        return int(last_order_index) + 1

    @staticmethod
    async def create(session: AsyncSession, *, question: Question) -> Question:
        session.add(question)
        await session.flush()
        return question

    @staticmethod
    async def delete_by_id(session: AsyncSession, *, question_id: UUID) -> None:
        await session.execute(delete(Question).where(Question.id == question_id))
