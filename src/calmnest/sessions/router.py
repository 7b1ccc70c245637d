"""Session tracking router: /api/sessions/* endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from calmnest.auth.dependencies import get_current_claims
from calmnest.auth.jwt import TokenClaims
from calmnest.database import get_session
from calmnest.dependencies import get_session_service
from calmnest.sessions.schemas import (
    SessionCreateRequest,
    SessionCreateResponse,
    SessionHistoryResponse,
    SessionResponse,
)
from calmnest.sessions.service import SessionService

router = APIRouter(prefix="/api/sessions", tags=["Sessions"])


@router.post("", response_model=SessionCreateResponse, status_code=201)
async def record_session(
    body: SessionCreateRequest,
    claims: TokenClaims = Depends(get_current_claims),
    service: SessionService = Depends(get_session_service),
    db: AsyncSession = Depends(get_session),
) -> SessionCreateResponse:
    """Record a completed therapy session for the caller."""
    record = await service.record_session(
        claims.user_id,
        therapy_type=body.therapy_type,
        content_id=body.content_id,
        duration=body.duration,
        mood_before=body.mood_before,
        mood_after=body.mood_after,
        notes=body.notes,
    )
    await db.commit()
    return SessionCreateResponse(message="Session recorded successfully", session=SessionResponse.from_record(record))


@router.get("/history", response_model=SessionHistoryResponse)
async def session_history(
    page: int = Query(1),
    limit: int | None = Query(None),
    claims: TokenClaims = Depends(get_current_claims),
    service: SessionService = Depends(get_session_service),
) -> SessionHistoryResponse:
    """Paginated history of the caller's own sessions, newest first."""
    result = await service.list_history(claims.user_id, page=page, page_size=limit)
    return SessionHistoryResponse(
        sessions=[SessionResponse.from_record(r) for r in result.items],
        total_pages=result.total_pages,
        current_page=result.current_page,
        total=result.total,
    )
