"""Content catalogue router: /api/audio, /api/reading, /api/yoga."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from calmnest.auth.dependencies import get_current_claims
from calmnest.auth.jwt import TokenClaims
from calmnest.content.schemas import (
    AudioItem,
    AudioListResponse,
    ReadingCreateRequest,
    ReadingCreateResponse,
    ReadingItem,
    ReadingListResponse,
    YogaItem,
    YogaListResponse,
)
from calmnest.content.service import ContentService
from calmnest.database import get_session
from calmnest.dependencies import get_content_service

router = APIRouter(prefix="/api", tags=["Content"])


@router.get("/audio", response_model=AudioListResponse)
async def list_audio(
    category: str | None = Query(None),
    search: str | None = Query(None),
    page: int = Query(1),
    limit: int | None = Query(None),
    service: ContentService = Depends(get_content_service),
) -> AudioListResponse:
    result = await service.list_audio(category=category, search=search, page=page, limit=limit)
    return AudioListResponse(
        content=[AudioItem.model_validate(item) for item in result.items],
        total_pages=result.total_pages,
        current_page=result.current_page,
        total=result.total,
    )


@router.get("/reading", response_model=ReadingListResponse)
async def list_reading(
    category: str | None = Query(None),
    search: str | None = Query(None),
    page: int = Query(1),
    limit: int | None = Query(None),
    service: ContentService = Depends(get_content_service),
) -> ReadingListResponse:
    result = await service.list_reading(category=category, search=search, page=page, limit=limit)
    return ReadingListResponse(
        content=[ReadingItem.model_validate(item) for item in result.items],
        total_pages=result.total_pages,
        current_page=result.current_page,
        total=result.total,
    )


@router.post("/reading", response_model=ReadingCreateResponse, status_code=201)
async def create_reading(
    body: ReadingCreateRequest,
    claims: TokenClaims = Depends(get_current_claims),
    service: ContentService = Depends(get_content_service),
    db: AsyncSession = Depends(get_session),
) -> ReadingCreateResponse:
    """Create a reading item attributed to the caller."""
    item = await service.create_reading(
        claims.user_id,
        title=body.title,
        content=body.content,
        category=body.category,
        author=body.author,
        tags=body.tags,
    )
    await db.commit()
    return ReadingCreateResponse(
        message="Reading content created successfully",
        content=ReadingItem.model_validate(item),
    )


@router.get("/yoga", response_model=YogaListResponse)
async def list_yoga(
    difficulty: str | None = Query(None),
    category: str | None = Query(None),
    page: int = Query(1),
    limit: int | None = Query(None),
    service: ContentService = Depends(get_content_service),
) -> YogaListResponse:
    result = await service.list_yoga(difficulty=difficulty, category=category, page=page, limit=limit)
    return YogaListResponse(
        content=[YogaItem.model_validate(item) for item in result.items],
        total_pages=result.total_pages,
        current_page=result.current_page,
        total=result.total,
    )
