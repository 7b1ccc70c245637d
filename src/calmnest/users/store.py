"""Credential store: persistence contract for user records and its SQL implementation."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError

from calmnest.db.models import User
from calmnest.errors import ConflictError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class UserStore(Protocol):
    """Operations the auth, profile and session services need from a user backend.

    ``increment_progress`` must be atomic with respect to concurrent callers
    for the same user: a native atomic increment or a compare-and-swap loop,
    never a read followed by a separate write.
    """

    async def get_by_id(self, user_id: int) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def find_by_username_or_email(self, username: str, email: str) -> User | None: ...

    async def add(self, user: User) -> User: ...

    async def touch_last_active(self, user: User, at: datetime) -> None: ...

    async def update_fields(self, user: User, fields: dict[str, Any]) -> User: ...

    async def increment_progress(self, user_id: int, sessions: int, time_spent: float, at: datetime) -> bool: ...

    async def count(self) -> int: ...

    async def count_active_since(self, since: datetime) -> int: ...


class SqlUserStore:
    """UserStore backed by an SQLAlchemy AsyncSession. The caller owns the transaction."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_id(self, user_id: int) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive)."""
        result = await self.db.execute(select(User).where(func.lower(User.email) == email.strip().lower()))
        return result.scalar_one_or_none()

    async def find_by_username_or_email(self, username: str, email: str) -> User | None:
        result = await self.db.execute(
            select(User)
            .where(or_(User.username == username, func.lower(User.email) == email.strip().lower()))
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def add(self, user: User) -> User:
        """Insert a user. A unique-index violation from a racing insert becomes ConflictError."""
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConflictError from e
        return user

    async def touch_last_active(self, user: User, at: datetime) -> None:
        user.last_active = at
        user.updated_at = at
        await self.db.flush()

    async def update_fields(self, user: User, fields: dict[str, Any]) -> User:
        for name, value in fields.items():
            setattr(user, name, value)
        await self.db.flush()
        return user

    async def increment_progress(self, user_id: int, sessions: int, time_spent: float, at: datetime) -> bool:
        """Apply a single ``UPDATE ... SET col = col + n``. Returns False if the user does not exist."""
        result = await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(
                sessions_completed=User.sessions_completed + sessions,
                total_time_spent=User.total_time_spent + time_spent,
                last_active=at,
                updated_at=at,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(User))
        return int(result.scalar_one())

    async def count_active_since(self, since: datetime) -> int:
        result = await self.db.execute(select(func.count()).select_from(User).where(User.last_active >= since))
        return int(result.scalar_one())
