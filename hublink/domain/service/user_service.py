"""User domain service."""

from typing import Any

import logfire

from hublink.domain.error import NotFoundError
from hublink.domain.model import LocalUser
from hublink.domain.repository import PendingValidationRepository, UserRepository
from hublink.domain.value import UserField, UserId

from .base import Service


class UserService(Service):
    """Domain service for local user operations."""

    def __init__(
        self,
        user_repository: UserRepository,
        pending_validation_repository: PendingValidationRepository,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            pending_validation_repository: Pending validation registry
        """
        self.user_repository = user_repository
        self.pending_validation_repository = pending_validation_repository

    async def get_by_id(self, user_id: UserId) -> LocalUser:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            logfire.info("User found", user_id=str(user_id), username=user.username)
            return user

    async def get_uid_by_email(self, email: str) -> UserId | None:
        """Get the ID of the user owning an email address.

        Args:
            email: Email address

        Returns:
            User ID if found, None otherwise
        """
        with logfire.span("user_service.get_uid_by_email", email=email):
            user_id = await self.user_repository.find_uid_by_email(email)
            if user_id:
                logfire.info("User found", email=email, user_id=str(user_id))
            else:
                logfire.info("No user with email", email=email)
            return user_id

    async def get_field(self, user_id: UserId, field: UserField) -> Any:
        """Read one field of a user."""
        return await self.user_repository.get_field(user_id, field)

    async def get_fields(
        self, user_id: UserId, fields: list[UserField]
    ) -> dict[UserField, Any]:
        """Read several fields of a user."""
        return await self.user_repository.get_fields(user_id, fields)

    async def set_field(self, user_id: UserId, field: UserField, value: Any) -> None:
        """Write one field of a user.

        Args:
            user_id: User ID
            field: Field to write
            value: New value, None clears the field
        """
        with logfire.span(
            "user_service.set_field", user_id=str(user_id), field=field.value
        ):
            await self.user_repository.set_field(user_id, field, value)

    async def create_user(self, username: str, email: str) -> UserId:
        """Create a user awaiting email validation.

        If the username is taken the first free ``{username}-{n}`` is used.

        Args:
            username: Preferred username
            email: Email address

        Returns:
            ID of the new user

        Raises:
            DuplicateError: If the email is already registered
        """
        with logfire.span("user_service.create_user", username=username, email=email):
            unique_username = await self._unique_username(username)
            user_id = await self.user_repository.create(unique_username, email)
            await self.pending_validation_repository.add(user_id)
            logfire.info(
                "User created",
                user_id=str(user_id),
                username=unique_username,
                renamed=unique_username != username,
            )
            return user_id

    async def _unique_username(self, username: str) -> str:
        """Find the first username not yet taken."""
        candidate = username
        suffix = 0
        while await self.user_repository.find_by_username(candidate):
            suffix += 1
            candidate = f"{username}-{suffix}"
        return candidate
