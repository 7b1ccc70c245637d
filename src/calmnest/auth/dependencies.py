"""FastAPI access-control dependencies."""

from __future__ import annotations

import structlog
from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from calmnest.auth.jwt import TokenClaims, TokenRejection, verify_token
from calmnest.errors import Forbidden, Unauthorized

logger = structlog.get_logger()

# auto_error=False so a missing header reaches us and becomes 401 rather than FastAPI's 403.
_bearer = HTTPBearer(auto_error=False)


async def get_current_claims(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
) -> TokenClaims:
    """
    Verify the bearer token and return its claims.

    No token at all raises Unauthorized (401); a token that fails verification
    raises Forbidden (403). Verified claims are also stored on ``request.state``.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized

    result = verify_token(credentials.credentials)
    if isinstance(result, TokenRejection):
        logger.info("token_rejected", reason=result.value, path=request.url.path)
        raise Forbidden

    request.state.claims = result
    return result


async def require_admin(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
    """Same as get_current_claims but additionally requires role=admin."""
    if claims.role != "admin":
        logger.info("admin_access_denied", user_id=claims.user_id, role=claims.role)
        raise Forbidden("Admin access required")
    return claims
