"""Content catalogue queries and reading-content creation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Generic, TypeVar

import structlog

from calmnest.config import get_settings
from calmnest.db.models import (
    AUDIO_CATEGORIES,
    READING_CATEGORIES,
    YOGA_CATEGORIES,
    YOGA_DIFFICULTIES,
    ReadingContent,
)
from calmnest.errors import ValidationError
from calmnest.sessions.service import validate_page

if TYPE_CHECKING:
    from calmnest.content.store import ContentStore

logger = structlog.get_logger()

T = TypeVar("T")


@dataclass
class ContentPage(Generic[T]):
    items: list[T]
    total: int
    total_pages: int
    current_page: int


def _check_choice(field: str, value: str | None, choices: tuple[str, ...]) -> None:
    if value is not None and value not in choices:
        raise ValidationError(
            f"{field} must be one of {', '.join(choices)}",
            errors=[{"field": field, "message": "unknown value"}],
        )


class ContentService:
    def __init__(self, content: ContentStore) -> None:
        self.content = content

    def _window(self, page: int, limit: int | None) -> tuple[int, int]:
        if limit is None:
            limit = get_settings().page_size_default
        validate_page(page, limit)
        return (page - 1) * limit, limit

    async def list_audio(
        self, category: str | None = None, search: str | None = None, page: int = 1, limit: int | None = None
    ) -> ContentPage:
        _check_choice("category", category, AUDIO_CATEGORIES)
        offset, limit = self._window(page, limit)
        items, total = await self.content.list_audio(category, search, offset, limit)
        return ContentPage(items, total, math.ceil(total / limit), page)

    async def list_reading(
        self, category: str | None = None, search: str | None = None, page: int = 1, limit: int | None = None
    ) -> ContentPage:
        _check_choice("category", category, READING_CATEGORIES)
        offset, limit = self._window(page, limit)
        items, total = await self.content.list_reading(category, search, offset, limit)
        return ContentPage(items, total, math.ceil(total / limit), page)

    async def list_yoga(
        self,
        difficulty: str | None = None,
        category: str | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> ContentPage:
        _check_choice("difficulty", difficulty, YOGA_DIFFICULTIES)
        _check_choice("category", category, YOGA_CATEGORIES)
        offset, limit = self._window(page, limit)
        items, total = await self.content.list_yoga(difficulty, category, offset, limit)
        return ContentPage(items, total, math.ceil(total / limit), page)

    async def create_reading(
        self,
        uploaded_by: int,
        title: str,
        content: str,
        category: str,
        author: str | None = None,
        tags: list[str] | None = None,
    ) -> ReadingContent:
        """
        Add a reading item attributed to the caller.

        Raises:
            ValidationError: Blank title/content or unknown category.
        """
        if not title.strip() or not content.strip():
            raise ValidationError("Title and content are required")
        _check_choice("category", category, READING_CATEGORIES)

        item = await self.content.add_reading(
            ReadingContent(
                title=title.strip(),
                content=content,
                category=category,
                author=author,
                tags=tags or [],
                is_active=True,
                read_count=0,
                uploaded_by=uploaded_by,
                created_at=datetime.now(timezone.utc),
            )
        )
        logger.info("reading_content_created", content_id=item.id, uploaded_by=uploaded_by)
        return item
