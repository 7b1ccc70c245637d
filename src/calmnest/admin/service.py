"""Platform-wide analytics counts for administrators."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from calmnest.config import get_settings

if TYPE_CHECKING:
    from calmnest.content.store import ContentStore
    from calmnest.sessions.store import SessionStore
    from calmnest.users.store import UserStore


@dataclass
class Analytics:
    total_users: int
    total_sessions: int
    total_audio_content: int
    total_reading_content: int
    active_users: int
    popular_therapies: list[tuple[str, int]]


class AnalyticsService:
    def __init__(self, users: UserStore, sessions: SessionStore, content: ContentStore) -> None:
        self.users = users
        self.sessions = sessions
        self.content = content

    async def snapshot(self, now: datetime | None = None) -> Analytics:
        """Counts as of now; active users are those seen within the configured window."""
        now = now or datetime.now(timezone.utc)
        since = now - timedelta(days=get_settings().active_user_window_days)
        return Analytics(
            total_users=await self.users.count(),
            total_sessions=await self.sessions.count(),
            total_audio_content=await self.content.count_audio(),
            total_reading_content=await self.content.count_reading(),
            active_users=await self.users.count_active_since(since),
            popular_therapies=await self.sessions.count_by_therapy_type(),
        )
