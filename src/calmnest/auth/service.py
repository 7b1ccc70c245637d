"""
Authentication business logic.

Handles registration and login. Request-scoped and stateless: everything it
needs arrives through the injected UserStore.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from typing import TYPE_CHECKING

import structlog

from calmnest.auth.jwt import TokenClaims, create_access_token
from calmnest.auth.password import check_needs_rehash, hash_password, verify_password
from calmnest.config import get_settings
from calmnest.db.models import User
from calmnest.errors import ConflictError, CryptoError, InternalError, InvalidCredentials, ValidationError

if TYPE_CHECKING:
    from calmnest.users.store import UserStore

logger = structlog.get_logger()

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
NAME_MAX_LENGTH = 64
EMAIL_MAX_LENGTH = 320
AGE_MIN = 13
AGE_MAX = 120


@dataclass
class AuthResult:
    user: User
    token: str


@lru_cache
def _dummy_hash() -> str:
    # Unknown emails still pay for one verification so response time does not reveal them.
    return hash_password("calmnest-timing-equalizer")


def validate_age(age: int | None, errors: list[dict[str, str]]) -> None:
    if age is not None and not AGE_MIN <= age <= AGE_MAX:
        errors.append({"field": "age", "message": f"Age must be between {AGE_MIN} and {AGE_MAX}"})


def validate_name_length(field: str, value: str, errors: list[dict[str, str]]) -> None:
    if len(value.strip()) > NAME_MAX_LENGTH:
        errors.append({"field": field, "message": f"{field} must be at most {NAME_MAX_LENGTH} characters"})


def validate_registration(
    username: str,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    age: int | None,
) -> None:
    """
    Check registration input before anything touches the store.

    Raises:
        ValidationError: With one entry per offending field.
    """
    required = {
        "username": username,
        "email": email,
        "password": password,
        "firstName": first_name,
        "lastName": last_name,
    }
    missing = [name for name, value in required.items() if not value or not value.strip()]
    if missing:
        raise ValidationError(
            "All required fields must be provided",
            errors=[{"field": name, "message": "Field is required"} for name in missing],
        )

    errors: list[dict[str, str]] = []
    min_length = get_settings().password_min_length
    if len(password) < min_length:
        errors.append({"field": "password", "message": f"Password must be at least {min_length} characters long"})
    if not USERNAME_MIN_LENGTH <= len(username.strip()) <= USERNAME_MAX_LENGTH:
        errors.append(
            {
                "field": "username",
                "message": f"Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters",
            }
        )
    if len(email.strip()) > EMAIL_MAX_LENGTH:
        errors.append({"field": "email", "message": f"Email must be at most {EMAIL_MAX_LENGTH} characters"})
    validate_name_length("firstName", first_name, errors)
    validate_name_length("lastName", last_name, errors)
    validate_age(age, errors)
    if errors:
        raise ValidationError(errors[0]["message"], errors=errors)


class AuthService:
    """Registration and login on top of a UserStore."""

    def __init__(self, users: UserStore) -> None:
        self.users = users

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        age: int | None = None,
    ) -> AuthResult:
        """
        Create a new account and issue its first token.

        Raises:
            ValidationError: Missing field, short password, bad username or age.
            ConflictError: Username or email (case-insensitive) already registered.
            InternalError: Password hashing failed.
        """
        validate_registration(username, email, password, first_name, last_name, age)
        username = username.strip()
        email = email.strip().lower()

        existing = await self.users.find_by_username_or_email(username, email)
        if existing is not None:
            logger.info("registration_conflict", username=username)
            raise ConflictError

        try:
            password_hash = hash_password(password)
        except CryptoError:
            logger.exception("password_hash_failed")
            raise InternalError from None

        now = datetime.now(timezone.utc)
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            age=age,
            preferences={},
            role="user",
            is_verified=False,
            sessions_completed=0,
            total_time_spent=0.0,
            last_active=now,
            created_at=now,
            updated_at=now,
        )
        user = await self.users.add(user)
        logger.info("user_registered", user_id=user.id, username=user.username)
        return AuthResult(user=user, token=issue_token_for(user))

    async def login(self, email: str, password: str) -> AuthResult:
        """
        Authenticate with email + password.

        Raises:
            ValidationError: Email or password missing.
            InvalidCredentials: Unknown email or wrong password (indistinguishable).
            InternalError: The stored hash could not be checked.
        """
        if not email or not email.strip() or not password:
            raise ValidationError("Email and password are required")

        user = await self.users.get_by_email(email)
        try:
            if user is None:
                verify_password(password, _dummy_hash())
                logger.info("login_failed", reason="unknown_email")
                raise InvalidCredentials
            if not verify_password(password, user.password_hash):
                logger.info("login_failed", reason="wrong_password", user_id=user.id)
                raise InvalidCredentials
        except CryptoError:
            logger.exception("password_verify_failed", user_id=user.id if user else None)
            raise InternalError from None

        await self.users.touch_last_active(user, datetime.now(timezone.utc))

        if check_needs_rehash(user.password_hash):
            await self.users.update_fields(user, {"password_hash": hash_password(password)})
            logger.info("password_rehashed", user_id=user.id)

        logger.info("user_logged_in", user_id=user.id)
        return AuthResult(user=user, token=issue_token_for(user))


def issue_token_for(user: User) -> str:
    """Issue a token bound to the user's id, username and current role."""
    return create_access_token(TokenClaims(user_id=user.id, username=user.username, role=user.role))
