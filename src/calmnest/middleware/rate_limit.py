"""Redis-backed fixed-window rate limiting middleware."""

import time
from typing import Any

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from calmnest.redis_client import get_redis

logger = structlog.get_logger()

_EXEMPT_PATHS = frozenset({"/health", "/ready", "/api/health"})
_AUTH_PREFIX = "/api/auth/"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Count requests per client IP and window in Redis; /api/auth/* gets its own, smaller budget."""

    def __init__(
        self,
        app: Any,  # noqa: ANN401
        requests_per_window: int = 100,
        auth_requests_per_window: int = 5,
        window_seconds: int = 900,
    ) -> None:
        super().__init__(app)
        self.requests_per_window = requests_per_window
        self.auth_requests_per_window = auth_requests_per_window
        self.window_seconds = window_seconds

    def _bucket(self, path: str) -> tuple[str, int]:
        if path.startswith(_AUTH_PREFIX):
            return "auth", self.auth_requests_per_window
        return "api", self.requests_per_window

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Check the caller's counter, return 429 once the budget for this window is spent."""
        path = request.url.path
        if path in _EXEMPT_PATHS:
            return await call_next(request)

        try:
            redis = get_redis()
        except RuntimeError:
            # Redis not initialized, run without rate limiting
            return await call_next(request)

        bucket, limit = self._bucket(path)
        client_ip = request.client.host if request.client else "unknown"
        window = int(time.time()) // self.window_seconds
        rate_key = f"ratelimit:{bucket}:{client_ip}:{window}"

        pipe = redis.pipeline()
        pipe.incr(rate_key)
        pipe.expire(rate_key, self.window_seconds + 1)
        results: list[Any] = await pipe.execute()

        current_count = int(results[0])
        remaining = max(0, limit - current_count)

        if current_count > limit:
            logger.info("rate_limited", bucket=bucket, client_ip=client_ip, path=path)
            return JSONResponse(
                status_code=429,
                content={"detail": "Too many requests. Try again later."},
                headers={
                    "Retry-After": str(self.window_seconds),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Limit": str(limit),
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        response.headers["X-RateLimit-Limit"] = str(limit)
        return response
