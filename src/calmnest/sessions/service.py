"""
Session accounting.

Records completed therapy sessions and folds each one into the owner's
progress counters. The counter update goes through the store's atomic
increment, so concurrent recordings for one user never lose an update.
"""

from __future__ import annotations

import math
from collections.abc import AsyncIterator
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog

from calmnest.config import get_settings
from calmnest.db.models import THERAPY_TYPES, UserSession
from calmnest.errors import NotFound, ValidationError

if TYPE_CHECKING:
    from calmnest.sessions.store import SessionStore
    from calmnest.users.store import UserStore

logger = structlog.get_logger()

MOOD_MIN = 1
MOOD_MAX = 10
CONTENT_ID_MAX_LENGTH = 64
# Largest row offset a signed 64-bit LIMIT/OFFSET parameter can carry.
MAX_OFFSET = 2**63 - 1


@dataclass
class SessionPage:
    items: list[UserSession]
    total: int
    total_pages: int
    current_page: int


def validate_session(
    therapy_type: str,
    content_id: str,
    duration: float,
    mood_before: int | None,
    mood_after: int | None,
) -> None:
    """
    Check a session recording before it is persisted.

    Raises:
        ValidationError: With one entry per offending field.
    """
    errors: list[dict[str, str]] = []
    if therapy_type not in THERAPY_TYPES:
        errors.append({"field": "therapyType", "message": f"therapyType must be one of {', '.join(THERAPY_TYPES)}"})
    if not content_id or not str(content_id).strip():
        errors.append({"field": "contentId", "message": "contentId is required"})
    elif len(str(content_id).strip()) > CONTENT_ID_MAX_LENGTH:
        errors.append(
            {"field": "contentId", "message": f"contentId must be at most {CONTENT_ID_MAX_LENGTH} characters"}
        )
    if isinstance(duration, bool) or not isinstance(duration, (int, float)) or not math.isfinite(duration):
        errors.append({"field": "duration", "message": "duration must be a number"})
    elif duration < 0:
        errors.append({"field": "duration", "message": "duration must not be negative"})
    for field, mood in (("moodBefore", mood_before), ("moodAfter", mood_after)):
        if mood is not None and not MOOD_MIN <= mood <= MOOD_MAX:
            errors.append({"field": field, "message": f"{field} must be between {MOOD_MIN} and {MOOD_MAX}"})
    if errors:
        raise ValidationError(errors[0]["message"], errors=errors)


def validate_page(page: int, page_size: int) -> None:
    max_size = get_settings().page_size_max
    if page < 1:
        raise ValidationError("page must be at least 1", errors=[{"field": "page", "message": "must be >= 1"}])
    if not 1 <= page_size <= max_size:
        raise ValidationError(
            f"limit must be between 1 and {max_size}",
            errors=[{"field": "limit", "message": f"must be between 1 and {max_size}"}],
        )
    if (page - 1) * page_size > MAX_OFFSET:
        raise ValidationError("page is out of range", errors=[{"field": "page", "message": "too large"}])


class SessionService:
    def __init__(self, sessions: SessionStore, users: UserStore) -> None:
        self.sessions = sessions
        self.users = users

    async def record_session(
        self,
        user_id: int,
        therapy_type: str,
        content_id: str,
        duration: float,
        mood_before: int | None = None,
        mood_after: int | None = None,
        notes: str | None = None,
    ) -> UserSession:
        """
        Persist a completed session and update the owner's progress counters.

        Both writes happen in the caller's transaction. The counter update runs
        first so a missing owner is detected before the record is inserted.

        Raises:
            ValidationError: Bad therapy type, content id, duration or mood.
            NotFound: The user no longer exists.
        """
        validate_session(therapy_type, content_id, duration, mood_before, mood_after)

        now = datetime.now(timezone.utc)
        updated = await self.users.increment_progress(user_id, sessions=1, time_spent=float(duration), at=now)
        if not updated:
            raise NotFound("User not found")

        record = await self.sessions.add(
            UserSession(
                user_id=user_id,
                therapy_type=therapy_type,
                content_id=str(content_id).strip(),
                duration=float(duration),
                mood_before=mood_before,
                mood_after=mood_after,
                notes=notes,
                completion_status="completed",
                created_at=now,
            )
        )

        logger.info(
            "session_recorded",
            user_id=user_id,
            session_id=record.id,
            therapy_type=therapy_type,
            duration=duration,
        )
        return record

    async def list_history(self, user_id: int, page: int = 1, page_size: int | None = None) -> SessionPage:
        """One page of the user's own sessions, newest first."""
        if page_size is None:
            page_size = get_settings().page_size_default
        validate_page(page, page_size)

        total = await self.sessions.count_for_user(user_id)
        items = await self.sessions.page_for_user(user_id, offset=(page - 1) * page_size, limit=page_size)
        return SessionPage(
            items=items,
            total=total,
            total_pages=math.ceil(total / page_size),
            current_page=page,
        )

    async def iter_history(self, user_id: int, page_size: int | None = None) -> AsyncIterator[UserSession]:
        """Walk every page of the user's history lazily. Each call starts again from page 1."""
        page = 1
        while True:
            result = await self.list_history(user_id, page=page, page_size=page_size)
            for item in result.items:
                yield item
            if page >= result.total_pages:
                return
            page += 1
