"""Session store: persistence contract for therapy session records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from sqlalchemy import func, select

from calmnest.db.models import UserSession

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class SessionStore(Protocol):
    async def add(self, record: UserSession) -> UserSession: ...

    async def page_for_user(self, user_id: int, offset: int, limit: int) -> list[UserSession]: ...

    async def count_for_user(self, user_id: int) -> int: ...

    async def count(self) -> int: ...

    async def count_by_therapy_type(self) -> list[tuple[str, int]]: ...


class SqlSessionStore:
    """SessionStore backed by an SQLAlchemy AsyncSession."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def add(self, record: UserSession) -> UserSession:
        self.db.add(record)
        await self.db.flush()
        return record

    async def page_for_user(self, user_id: int, offset: int, limit: int) -> list[UserSession]:
        """Newest first; id breaks ties between records created in the same instant."""
        result = await self.db.execute(
            select(UserSession)
            .where(UserSession.user_id == user_id)
            .order_by(UserSession.created_at.desc(), UserSession.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count_for_user(self, user_id: int) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(UserSession).where(UserSession.user_id == user_id)
        )
        return int(result.scalar_one())

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(UserSession))
        return int(result.scalar_one())

    async def count_by_therapy_type(self) -> list[tuple[str, int]]:
        """(therapy_type, count) pairs, most popular first."""
        count_col = func.count(UserSession.id).label("count")
        result = await self.db.execute(
            select(UserSession.therapy_type, count_col)
            .group_by(UserSession.therapy_type)
            .order_by(count_col.desc(), UserSession.therapy_type)
        )
        return [(row[0], int(row[1])) for row in result.all()]
