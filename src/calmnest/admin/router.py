"""Admin router: /api/admin/* endpoints (role=admin only)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from calmnest.admin.schemas import AnalyticsResponse, TherapyCount
from calmnest.admin.service import AnalyticsService
from calmnest.auth.dependencies import require_admin
from calmnest.auth.jwt import TokenClaims
from calmnest.dependencies import get_analytics_service

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/analytics", response_model=AnalyticsResponse)
async def analytics(
    _admin: TokenClaims = Depends(require_admin),
    service: AnalyticsService = Depends(get_analytics_service),
) -> AnalyticsResponse:
    """Aggregate platform counts."""
    snapshot = await service.snapshot()
    return AnalyticsResponse(
        total_users=snapshot.total_users,
        total_sessions=snapshot.total_sessions,
        total_audio_content=snapshot.total_audio_content,
        total_reading_content=snapshot.total_reading_content,
        active_users=snapshot.active_users,
        popular_therapies=[TherapyCount(therapy_type=t, count=c) for t, c in snapshot.popular_therapies],
    )
