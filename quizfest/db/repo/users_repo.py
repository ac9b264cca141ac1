from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from quizfest.db.models.users import User


class UsersRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, user_id: int) -> User | None:
        return await session.get(User, user_id)
