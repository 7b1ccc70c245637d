"""Typed application errors.

Every core operation raises one of these. The error handler middleware maps
each to its HTTP status and a client-safe ``detail`` message.
"""

from __future__ import annotations

from typing import Any


class CalmNestError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    def to_content(self) -> dict[str, Any]:
        return {"detail": self.detail}


class ValidationError(CalmNestError):
    """Malformed or missing input."""

    status_code = 400
    default_detail = "Validation error"

    def __init__(self, detail: str | None = None, errors: list[dict[str, str]] | None = None) -> None:
        super().__init__(detail)
        self.errors = errors or []

    def to_content(self) -> dict[str, Any]:
        content = super().to_content()
        if self.errors:
            content["errors"] = self.errors
        return content


class ConflictError(CalmNestError):
    """Duplicate identity (username or email already taken)."""

    status_code = 409
    default_detail = "User with this email or username already exists"


class InvalidCredentials(CalmNestError):
    """Unknown email or wrong password. The two cases are never distinguished."""

    status_code = 401
    default_detail = "Invalid credentials"

    def __init__(self) -> None:
        super().__init__(self.default_detail)


class Unauthorized(CalmNestError):
    """No bearer token was presented."""

    status_code = 401
    default_detail = "Access token required"


class Forbidden(CalmNestError):
    """Invalid or expired token, or insufficient role."""

    status_code = 403
    default_detail = "Invalid or expired token"


class NotFound(CalmNestError):
    status_code = 404
    default_detail = "Not found"


class InternalError(CalmNestError):
    """Unexpected store or crypto failure. Detail is always generic."""

    status_code = 500

    def __init__(self) -> None:
        super().__init__(self.default_detail)


class CryptoError(Exception):
    """The password hashing primitive failed (e.g. malformed digest)."""
