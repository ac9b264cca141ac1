from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from quizfest.db.models.participations import Participation


class ParticipationsRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, participation_id: UUID) -> Participation | None:
        return await session.get(Participation, participation_id)

    @staticmethod
    async def create(session: AsyncSession, *, participation: Participation) -> Participation:
        session.add(participation)
        await session.flush()
        return participation

    @staticmethod
    async def list_for_quiz(session: AsyncSession, *, quiz_id: UUID) -> list[Participation]:
        stmt = (
            select(Participation)
            .where(Participation.quiz_id == quiz_id)
            .order_by(Participation.completed_at.asc(), Participation.id.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
