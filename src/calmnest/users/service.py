"""User profile business logic."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import structlog

from calmnest.auth.service import validate_age, validate_name_length
from calmnest.errors import NotFound, ValidationError

if TYPE_CHECKING:
    from calmnest.db.models import User
    from calmnest.users.store import UserStore

logger = structlog.get_logger()


class ProfileService:
    def __init__(self, users: UserStore) -> None:
        self.users = users

    async def get_profile(self, user_id: int) -> User:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    async def update_profile(
        self,
        user_id: int,
        first_name: str | None = None,
        last_name: str | None = None,
        age: int | None = None,
        preferences: dict[str, list[str]] | None = None,
    ) -> User:
        """
        Update profile fields. Only the provided fields change.

        Raises:
            ValidationError: Blank or overlong name, or age out of range.
            NotFound: The token's user no longer exists.
        """
        errors: list[dict[str, str]] = []
        for field, value in (("firstName", first_name), ("lastName", last_name)):
            if value is not None and not value.strip():
                errors.append({"field": field, "message": "Field must not be blank"})
            elif value is not None:
                validate_name_length(field, value, errors)
        validate_age(age, errors)
        if errors:
            raise ValidationError(errors[0]["message"], errors=errors)

        user = await self.get_profile(user_id)

        fields: dict[str, Any] = {}
        if first_name is not None:
            fields["first_name"] = first_name.strip()
        if last_name is not None:
            fields["last_name"] = last_name.strip()
        if age is not None:
            fields["age"] = age
        if preferences is not None:
            fields["preferences"] = preferences
        if not fields:
            return user

        fields["updated_at"] = datetime.now(timezone.utc)
        user = await self.users.update_fields(user, fields)
        logger.info("profile_updated", user_id=user.id, fields=sorted(fields))
        return user
