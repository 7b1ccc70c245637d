"""Request/response schemas for user profile endpoints."""

from __future__ import annotations

from calmnest.auth.schemas import CamelModel, Preferences, UserResponse


class ProfileUpdateRequest(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    age: int | None = None
    preferences: Preferences | None = None


class ProfileUpdateResponse(CamelModel):
    message: str
    user: UserResponse
