"""Content store: read-mostly catalogue of audio, reading and yoga items."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar

from sqlalchemy import ColumnElement, func, or_, select

from calmnest.db.models import AudioContent, ReadingContent, YogaContent

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

ContentT = TypeVar("ContentT", AudioContent, ReadingContent, YogaContent)


class ContentStore(Protocol):
    async def list_audio(
        self, category: str | None, search: str | None, offset: int, limit: int
    ) -> tuple[list[AudioContent], int]: ...

    async def list_reading(
        self, category: str | None, search: str | None, offset: int, limit: int
    ) -> tuple[list[ReadingContent], int]: ...

    async def list_yoga(
        self, difficulty: str | None, category: str | None, offset: int, limit: int
    ) -> tuple[list[YogaContent], int]: ...

    async def add_reading(self, item: ReadingContent) -> ReadingContent: ...

    async def count_audio(self) -> int: ...

    async def count_reading(self) -> int: ...


def _contains(columns: list[Any], term: str) -> ColumnElement[bool]:
    """Case-insensitive substring match on any of the columns. LIKE wildcards in the term are literal."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"
    return or_(*(col.ilike(pattern, escape="\\") for col in columns))


class SqlContentStore:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _page(
        self,
        model: type[ContentT],
        conditions: list[ColumnElement[bool]],
        offset: int,
        limit: int,
    ) -> tuple[list[ContentT], int]:
        """Active items matching all conditions, newest first, plus the total match count."""
        conditions = [model.is_active.is_(True), *conditions]
        total_result = await self.db.execute(select(func.count()).select_from(model).where(*conditions))
        result = await self.db.execute(
            select(model)
            .where(*conditions)
            .order_by(model.created_at.desc(), model.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), int(total_result.scalar_one())

    async def list_audio(
        self, category: str | None, search: str | None, offset: int, limit: int
    ) -> tuple[list[AudioContent], int]:
        conditions: list[ColumnElement[bool]] = []
        if category:
            conditions.append(AudioContent.category == category)
        if search:
            conditions.append(_contains([AudioContent.title, AudioContent.description, AudioContent.artist], search))
        return await self._page(AudioContent, conditions, offset, limit)

    async def list_reading(
        self, category: str | None, search: str | None, offset: int, limit: int
    ) -> tuple[list[ReadingContent], int]:
        conditions: list[ColumnElement[bool]] = []
        if category:
            conditions.append(ReadingContent.category == category)
        if search:
            conditions.append(
                _contains([ReadingContent.title, ReadingContent.content, ReadingContent.author], search)
            )
        return await self._page(ReadingContent, conditions, offset, limit)

    async def list_yoga(
        self, difficulty: str | None, category: str | None, offset: int, limit: int
    ) -> tuple[list[YogaContent], int]:
        conditions: list[ColumnElement[bool]] = []
        if difficulty:
            conditions.append(YogaContent.difficulty == difficulty)
        if category:
            conditions.append(YogaContent.category == category)
        return await self._page(YogaContent, conditions, offset, limit)

    async def add_reading(self, item: ReadingContent) -> ReadingContent:
        self.db.add(item)
        await self.db.flush()
        return item

    async def count_audio(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(AudioContent))
        return int(result.scalar_one())

    async def count_reading(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(ReadingContent))
        return int(result.scalar_one())
