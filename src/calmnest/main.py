"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from calmnest.admin.router import router as admin_router
from calmnest.auth.router import router as auth_router
from calmnest.config import get_settings
from calmnest.content.router import router as content_router
from calmnest.database import close_db, init_db
from calmnest.health.router import router as health_router
from calmnest.middleware import setup_middleware
from calmnest.redis_client import close_redis, init_redis
from calmnest.sessions.router import router as sessions_router
from calmnest.users.router import router as users_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    if settings.uses_insecure_jwt_secret:
        logger.warning("insecure_jwt_secret", environment=settings.environment)
    await init_db(settings.database_url)
    await init_redis(settings.redis_url)
    logger.info("startup_complete", environment=settings.environment, version=settings.app_version)

    yield

    await close_db()
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="CalmNest API",
        description="Backend API for CalmNest: wellness content and therapy session tracking",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(sessions_router)
    app.include_router(content_router)
    app.include_router(admin_router)

    return app


app = create_app()
