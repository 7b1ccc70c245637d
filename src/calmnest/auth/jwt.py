"""
HS256 session token issuance and verification.

Tokens are self-contained: they carry the user id, username and role as they
were at issuance and expire a fixed number of days later. There is no
server-side revocation list, so a token stays valid for its full lifetime even
if the account's role changes afterwards.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
import structlog

from calmnest.config import get_settings
from calmnest.db.models import ROLES

logger = structlog.get_logger()

_signing_key: str | None = None


@dataclass(frozen=True)
class TokenClaims:
    """Identity and authorization facts embedded in a token."""

    user_id: int
    username: str
    role: str


class TokenRejection(enum.Enum):
    """Why a token failed verification."""

    MALFORMED = "malformed"
    EXPIRED = "expired"
    BAD_SIGNATURE = "bad_signature"


def _load_signing_key() -> str:
    """Load the signing key from settings (cached after first call)."""
    global _signing_key  # noqa: PLW0603
    if _signing_key is None:
        settings = get_settings()
        if settings.uses_insecure_jwt_secret:
            logger.warning("insecure_jwt_secret", hint="set CALMNEST_JWT_SECRET")
        _signing_key = settings.jwt_secret
    return _signing_key


def reset_signing_key() -> None:
    """Reset the cached signing key (useful for testing)."""
    global _signing_key  # noqa: PLW0603
    _signing_key = None


def create_access_token(claims: TokenClaims, issued_at: datetime | None = None) -> str:
    """
    Create a signed access token for the given claims.

    Args:
        claims: User id, username and role to embed.
        issued_at: Issuance time, defaults to now. Expiry is issued_at plus
            the configured lifetime.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    now = issued_at or datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": str(claims.user_id),
        "username": claims.username,
        "role": claims.role,
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expire_days),
    }
    return jwt.encode(payload, _load_signing_key(), algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> TokenClaims | TokenRejection:
    """
    Verify signature and expiry of a token.

    Returns the embedded claims, or a TokenRejection naming the failure.
    Never raises for a bad token.
    """
    settings = get_settings()
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            _load_signing_key(),
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        return TokenRejection.EXPIRED
    except jwt.InvalidSignatureError:
        return TokenRejection.BAD_SIGNATURE
    except jwt.InvalidTokenError:
        return TokenRejection.MALFORMED

    username = payload.get("username")
    role = payload.get("role")
    if not isinstance(username, str) or role not in ROLES:
        return TokenRejection.MALFORMED
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        return TokenRejection.MALFORMED

    return TokenClaims(user_id=user_id, username=username, role=role)
