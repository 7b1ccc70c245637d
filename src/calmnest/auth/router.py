"""Authentication router: /api/auth/* endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from calmnest.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from calmnest.auth.service import AuthService
from calmnest.database import get_session
from calmnest.dependencies import get_auth_service

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(
    body: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_session),
) -> TokenResponse:
    """Create an account and return its first token."""
    result = await service.register(
        username=body.username,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        age=body.age,
    )
    await db.commit()
    return TokenResponse(
        message="User registered successfully",
        token=result.token,
        user=UserResponse.from_user(result.user),
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_session),
) -> TokenResponse:
    """Authenticate with email + password."""
    result = await service.login(body.email, body.password)
    await db.commit()
    return TokenResponse(
        message="Login successful",
        token=result.token,
        user=UserResponse.from_user(result.user),
    )
