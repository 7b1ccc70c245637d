"""User profile router: /api/user/* endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from calmnest.auth.dependencies import get_current_claims
from calmnest.auth.jwt import TokenClaims
from calmnest.auth.schemas import UserResponse
from calmnest.database import get_session
from calmnest.dependencies import get_profile_service
from calmnest.users.schemas import ProfileUpdateRequest, ProfileUpdateResponse
from calmnest.users.service import ProfileService

router = APIRouter(prefix="/api/user", tags=["Users"])


@router.get("/profile", response_model=UserResponse)
async def get_profile(
    claims: TokenClaims = Depends(get_current_claims),
    service: ProfileService = Depends(get_profile_service),
) -> UserResponse:
    """Get own full profile."""
    user = await service.get_profile(claims.user_id)
    return UserResponse.from_user(user)


@router.put("/profile", response_model=ProfileUpdateResponse)
async def update_profile(
    body: ProfileUpdateRequest,
    claims: TokenClaims = Depends(get_current_claims),
    service: ProfileService = Depends(get_profile_service),
    db: AsyncSession = Depends(get_session),
) -> ProfileUpdateResponse:
    """Update firstName, lastName, age and preferences."""
    user = await service.update_profile(
        claims.user_id,
        first_name=body.first_name,
        last_name=body.last_name,
        age=body.age,
        preferences=body.preferences.model_dump() if body.preferences is not None else None,
    )
    await db.commit()
    return ProfileUpdateResponse(message="Profile updated successfully", user=UserResponse.from_user(user))
