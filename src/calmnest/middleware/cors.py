"""CORS for the CalmNest web frontend."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from calmnest.config import Settings

# Only the verbs the API routes use; there are no PATCH or DELETE endpoints.
_METHODS = ["GET", "POST", "PUT", "OPTIONS"]


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Allow the configured frontend origins to call the API with a bearer token."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=_METHODS,
        allow_headers=["Authorization", "Content-Type", "X-Request-Id"],
        expose_headers=["X-Request-Id", "X-RateLimit-Remaining", "X-RateLimit-Limit", "Retry-After"],
        max_age=600,
    )
