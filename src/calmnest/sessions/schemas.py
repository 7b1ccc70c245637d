"""Request/response schemas for session tracking endpoints."""

from __future__ import annotations

from datetime import datetime

from calmnest.auth.schemas import CamelModel
from calmnest.db.models import UserSession


class SessionCreateRequest(CamelModel):
    therapy_type: str
    content_id: str
    duration: float
    mood_before: int | None = None
    mood_after: int | None = None
    notes: str | None = None


class SessionResponse(CamelModel):
    id: int
    user_id: int
    therapy_type: str
    content_id: str
    duration: float
    completion_status: str
    mood_before: int | None
    mood_after: int | None
    notes: str | None
    created_at: datetime

    @classmethod
    def from_record(cls, record: UserSession) -> SessionResponse:
        return cls(
            id=record.id,
            user_id=record.user_id,
            therapy_type=record.therapy_type,
            content_id=record.content_id,
            duration=record.duration,
            completion_status=record.completion_status,
            mood_before=record.mood_before,
            mood_after=record.mood_after,
            notes=record.notes,
            created_at=record.created_at,
        )


class SessionCreateResponse(CamelModel):
    message: str
    session: SessionResponse


class SessionHistoryResponse(CamelModel):
    sessions: list[SessionResponse]
    total_pages: int
    current_page: int
    total: int
