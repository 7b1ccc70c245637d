"""Initial schema: users, user_sessions and the content catalogue.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

JSONDoc = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")
BigIntPK = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def _content_columns() -> list[sa.Column]:
    return [
        sa.Column("id", BigIntPK, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("category", sa.String(32), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("uploaded_by", sa.BigInteger(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        "users",
        sa.Column("id", BigIntPK, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(30), nullable=False, unique=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(256), nullable=False),
        sa.Column("first_name", sa.String(64), nullable=False),
        sa.Column("last_name", sa.String(64), nullable=False),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("preferences", JSONDoc, nullable=False),
        sa.Column("is_verified", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("role", sa.String(16), server_default="user", nullable=False),
        sa.Column("sessions_completed", sa.Integer(), server_default="0", nullable=False),
        sa.Column("total_time_spent", sa.Float(), server_default="0", nullable=False),
        sa.Column("last_active", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("role IN ('user', 'therapist', 'admin')", name="ck_users_role"),
        sa.CheckConstraint("sessions_completed >= 0", name="ck_users_sessions_completed"),
        sa.CheckConstraint("total_time_spent >= 0", name="ck_users_total_time_spent"),
    )

    op.create_table(
        "user_sessions",
        sa.Column("id", BigIntPK, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.BigInteger(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("therapy_type", sa.String(16), nullable=False),
        sa.Column("content_id", sa.String(64), nullable=False),
        sa.Column("duration", sa.Float(), nullable=False),
        sa.Column("completion_status", sa.String(16), server_default="started", nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("mood_before", sa.Integer(), nullable=True),
        sa.Column("mood_after", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "therapy_type IN ('audio', 'reading', 'yoga', 'laughing', 'talking', 'child', 'spiritual')",
            name="ck_user_sessions_therapy_type",
        ),
        sa.CheckConstraint(
            "completion_status IN ('started', 'completed', 'paused')", name="ck_user_sessions_status"
        ),
        sa.CheckConstraint(
            "mood_before IS NULL OR mood_before BETWEEN 1 AND 10", name="ck_user_sessions_mood_before"
        ),
        sa.CheckConstraint("mood_after IS NULL OR mood_after BETWEEN 1 AND 10", name="ck_user_sessions_mood_after"),
    )
    op.create_index("ix_user_sessions_user_created", "user_sessions", ["user_id", "created_at"])

    op.create_table(
        "audio_content",
        *_content_columns(),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("audio_url", sa.Text(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("artist", sa.String(200), nullable=True),
        sa.Column("tags", JSONDoc, nullable=False),
        sa.Column("play_count", sa.Integer(), server_default="0", nullable=False),
        sa.CheckConstraint(
            "category IN ('music', 'podcast', 'meditation', 'nature-sounds', 'affirmations')",
            name="ck_audio_content_category",
        ),
    )

    op.create_table(
        "reading_content",
        *_content_columns(),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author", sa.String(200), nullable=True),
        sa.Column("tags", JSONDoc, nullable=False),
        sa.Column("read_count", sa.Integer(), server_default="0", nullable=False),
        sa.CheckConstraint(
            "category IN ('quotes', 'articles', 'stories', 'poems', 'affirmations')",
            name="ck_reading_content_category",
        ),
    )

    op.create_table(
        "yoga_content",
        *_content_columns(),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("video_url", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("instructions", JSONDoc, nullable=False),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("difficulty", sa.String(16), server_default="beginner", nullable=False),
        sa.Column("benefits", JSONDoc, nullable=False),
        sa.CheckConstraint(
            "category IN ('stretching', 'meditation', 'breathing', 'full-routine')", name="ck_yoga_content_category"
        ),
        sa.CheckConstraint(
            "difficulty IN ('beginner', 'intermediate', 'advanced')", name="ck_yoga_content_difficulty"
        ),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("yoga_content")
    op.drop_table("reading_content")
    op.drop_table("audio_content")
    op.drop_index("ix_user_sessions_user_created", table_name="user_sessions")
    op.drop_table("user_sessions")
    op.drop_table("users")
