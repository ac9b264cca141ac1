from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from quizfest.db.models.participations import Participation
from quizfest.db.models.questions import Question
from quizfest.db.models.quizzes import Quiz


@dataclass(frozen=True, slots=True)
class QuizListRow:
    id: UUID
    title: str
    question_count: int
    participant_count: int
    created_at: datetime
    updated_at: datetime


class QuizzesRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, quiz_id: UUID) -> Quiz | None:
        return await session.get(Quiz, quiz_id)

    @staticmethod
    async def get_for_owner(
        session: AsyncSession,
        *,
        quiz_id: UUID,
        user_id: int,
    ) -> Quiz | None:
        stmt = select(Quiz).where(Quiz.id == quiz_id, Quiz.user_id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_for_owner(session: AsyncSession, *, user_id: int) -> list[QuizListRow]:
        question_count = (
            select(func.count(Question.id))
            .where(Question.quiz_id == Quiz.id)
            .correlate(Quiz)
            .scalar_subquery()
        )
        participant_count = (
            select(func.count(Participation.id))
            .where(Participation.quiz_id == Quiz.id)
            .correlate(Quiz)
            .scalar_subquery()
        )
        stmt = (
            select(
                Quiz.id,
                Quiz.title,
                question_count,
                participant_count,
                Quiz.created_at,
                Quiz.updated_at,
            )
            .where(Quiz.user_id == user_id)
            .order_by(Quiz.created_at.desc(), Quiz.id.asc())
        )
        result = await session.execute(stmt)
        return [
            QuizListRow(
                id=quiz_id,
                title=title,
                question_count=int(questions or 0),
                participant_count=int(participants or 0),
                created_at=created_at,
                updated_at=updated_at,
            )
            for quiz_id, title, questions, participants, created_at, updated_at in result.all()
        ]

    @staticmethod
    async def create(session: AsyncSession, *, quiz: Quiz) -> Quiz:
        session.add(quiz)
        await session.flush()
        return quiz

    @staticmethod
    async def delete_by_id(session: AsyncSession, *, quiz_id: UUID) -> None:
        # questions and participations go with it through ON DELETE CASCADE
        await session.execute(delete(Quiz).where(Quiz.id == quiz_id))
