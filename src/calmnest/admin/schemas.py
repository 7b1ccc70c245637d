"""Response schemas for admin endpoints."""

from __future__ import annotations

from calmnest.auth.schemas import CamelModel


class TherapyCount(CamelModel):
    therapy_type: str
    count: int


class AnalyticsResponse(CamelModel):
    total_users: int
    total_sessions: int
    total_audio_content: int
    total_reading_content: int
    active_users: int
    popular_therapies: list[TherapyCount]
