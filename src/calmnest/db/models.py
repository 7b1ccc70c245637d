"""ORM models for users, therapy sessions and wellness content."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from calmnest.db.base import Base

# SQLite only autoincrements INTEGER PRIMARY KEY columns.
BigIntPK = BigInteger().with_variant(Integer(), "sqlite")
JSONDoc = JSON().with_variant(JSONB(), "postgresql")

ROLES = ("user", "therapist", "admin")
THERAPY_TYPES = ("audio", "reading", "yoga", "laughing", "talking", "child", "spiritual")
# Only "completed" is ever written; "started" and "paused" exist in the schema but have no write path.
COMPLETION_STATUSES = ("started", "completed", "paused")

AUDIO_CATEGORIES = ("music", "podcast", "meditation", "nature-sounds", "affirmations")
READING_CATEGORIES = ("quotes", "articles", "stories", "poems", "affirmations")
YOGA_CATEGORIES = ("stretching", "meditation", "breathing", "full-routine")
YOGA_DIFFICULTIES = ("beginner", "intermediate", "advanced")


def _in_list(column: str, values: tuple[str, ...]) -> str:
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class User(Base):
    """A registered account with its profile and cumulative progress counters."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(_in_list("role", ROLES), name="ck_users_role"),
        CheckConstraint("sessions_completed >= 0", name="ck_users_sessions_completed"),
        CheckConstraint("total_time_spent >= 0", name="ck_users_total_time_spent"),
    )

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    # Stored lowercased; uniqueness is therefore case-insensitive.
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    first_name: Mapped[str] = mapped_column(String(64), nullable=False)
    last_name: Mapped[str] = mapped_column(String(64), nullable=False)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    preferences: Mapped[dict[str, Any]] = mapped_column(JSONDoc, nullable=False, default=dict)
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default="user")

    # --- Progress ---
    sessions_completed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_time_spent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)  # minutes
    last_active: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    sessions: Mapped[list[UserSession]] = relationship("UserSession", back_populates="user")


# ---------------------------------------------------------------------------
# Therapy sessions
# ---------------------------------------------------------------------------


class UserSession(Base):
    """One recorded therapy interaction. Immutable once written."""

    __tablename__ = "user_sessions"
    __table_args__ = (
        CheckConstraint(_in_list("therapy_type", THERAPY_TYPES), name="ck_user_sessions_therapy_type"),
        CheckConstraint(_in_list("completion_status", COMPLETION_STATUSES), name="ck_user_sessions_status"),
        CheckConstraint("mood_before IS NULL OR mood_before BETWEEN 1 AND 10", name="ck_user_sessions_mood_before"),
        CheckConstraint("mood_after IS NULL OR mood_after BETWEEN 1 AND 10", name="ck_user_sessions_mood_after"),
        Index("ix_user_sessions_user_created", "user_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    therapy_type: Mapped[str] = mapped_column(String(16), nullable=False)
    content_id: Mapped[str] = mapped_column(String(64), nullable=False)
    duration: Mapped[float] = mapped_column(Float, nullable=False)  # minutes
    completion_status: Mapped[str] = mapped_column(String(16), nullable=False, default="started")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    mood_before: Mapped[int | None] = mapped_column(Integer, nullable=True)
    mood_after: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    user: Mapped[User] = relationship("User", back_populates="sessions")


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------


class AudioContent(Base):
    __tablename__ = "audio_content"
    __table_args__ = (CheckConstraint(_in_list("category", AUDIO_CATEGORIES), name="ck_audio_content_category"),)

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    audio_url: Mapped[str] = mapped_column(Text, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)  # seconds
    artist: Mapped[str | None] = mapped_column(String(200), nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSONDoc, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    play_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    uploaded_by: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class ReadingContent(Base):
    __tablename__ = "reading_content"
    __table_args__ = (
        CheckConstraint(_in_list("category", READING_CATEGORIES), name="ck_reading_content_category"),
    )

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    author: Mapped[str | None] = mapped_column(String(200), nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSONDoc, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    read_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    uploaded_by: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class YogaContent(Base):
    __tablename__ = "yoga_content"
    __table_args__ = (
        CheckConstraint(_in_list("category", YOGA_CATEGORIES), name="ck_yoga_content_category"),
        CheckConstraint(_in_list("difficulty", YOGA_DIFFICULTIES), name="ck_yoga_content_difficulty"),
    )

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    video_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    instructions: Mapped[list[str]] = mapped_column(JSONDoc, nullable=False, default=list)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    difficulty: Mapped[str] = mapped_column(String(16), nullable=False, default="beginner")
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    benefits: Mapped[list[str]] = mapped_column(JSONDoc, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    uploaded_by: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
