"""Request/response schemas for authentication endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from calmnest.db.models import User


class CamelModel(BaseModel):
    """Base model exposing camelCase JSON keys while accepting either form on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class RegisterRequest(CamelModel):
    username: str
    email: EmailStr
    password: str = Field(..., max_length=128)
    first_name: str
    last_name: str
    age: int | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize email to lowercase."""
        return v.lower().strip()


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize email to lowercase."""
        return v.lower().strip()


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class Preferences(CamelModel):
    favorite_therapies: list[str] = Field(default_factory=list)
    music_genres: list[str] = Field(default_factory=list)
    book_categories: list[str] = Field(default_factory=list)


class Progress(CamelModel):
    sessions_completed: int
    total_time_spent: float
    last_active: datetime | None


class UserResponse(CamelModel):
    """User view returned to clients. Never includes the password hash."""

    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    age: int | None
    role: str
    is_verified: bool
    preferences: Preferences
    progress: Progress
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> UserResponse:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            age=user.age,
            role=user.role,
            is_verified=user.is_verified,
            preferences=Preferences.model_validate(user.preferences or {}),
            progress=Progress(
                sessions_completed=user.sessions_completed,
                total_time_spent=user.total_time_spent,
                last_active=user.last_active,
            ),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class TokenResponse(CamelModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: UserResponse
