"""Shared FastAPI dependencies: per-request service construction."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from calmnest.admin.service import AnalyticsService
from calmnest.auth.service import AuthService
from calmnest.content.service import ContentService
from calmnest.content.store import SqlContentStore
from calmnest.database import get_session
from calmnest.sessions.service import SessionService
from calmnest.sessions.store import SqlSessionStore
from calmnest.users.service import ProfileService
from calmnest.users.store import SqlUserStore


def get_auth_service(db: AsyncSession = Depends(get_session)) -> AuthService:
    return AuthService(SqlUserStore(db))


def get_profile_service(db: AsyncSession = Depends(get_session)) -> ProfileService:
    return ProfileService(SqlUserStore(db))


def get_session_service(db: AsyncSession = Depends(get_session)) -> SessionService:
    return SessionService(SqlSessionStore(db), SqlUserStore(db))


def get_content_service(db: AsyncSession = Depends(get_session)) -> ContentService:
    return ContentService(SqlContentStore(db))


def get_analytics_service(db: AsyncSession = Depends(get_session)) -> AnalyticsService:
    return AnalyticsService(SqlUserStore(db), SqlSessionStore(db), SqlContentStore(db))
