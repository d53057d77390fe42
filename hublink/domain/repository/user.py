"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from hublink.domain.model.user import LocalUser
from hublink.domain.value import UserField, UserId


class UserRepository(ABC):
    """Repository for LocalUser records.

    Besides whole-record reads it exposes field-level access, since the
    linking logic only ever touches a handful of columns at a time.
    Implementations raise StorageError for any backend failure.
    """

    @abstractmethod
    async def create(self, username: str, email: str) -> UserId:
        """Create a new user.

        Args:
            username: Unique username
            email: Unique email address

        Returns:
            ID of the new user

        Raises:
            DuplicateError: If the username or email is already taken
        """
        pass

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[LocalUser]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[LocalUser]:
        """Find a user by username.

        Args:
            username: Username to look up

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_uid_by_email(self, email: str) -> Optional[UserId]:
        """Find the ID of the user owning an email address.

        Args:
            email: Email address

        Returns:
            User ID if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_field(self, user_id: UserId, field: UserField) -> Any:
        """Read one field of a user.

        Args:
            user_id: The user's unique identifier
            field: Field to read

        Returns:
            Field value (None when unset)

        Raises:
            NotFoundError: If the user does not exist
        """
        pass

    @abstractmethod
    async def get_fields(
        self, user_id: UserId, fields: list[UserField]
    ) -> dict[UserField, Any]:
        """Read several fields of a user at once.

        Args:
            user_id: The user's unique identifier
            fields: Fields to read

        Returns:
            Mapping of field to value

        Raises:
            NotFoundError: If the user does not exist
        """
        pass

    @abstractmethod
    async def set_field(self, user_id: UserId, field: UserField, value: Any) -> None:
        """Write one field of a user. Passing None clears the field.

        Args:
            user_id: The user's unique identifier
            field: Field to write
            value: New value
        """
        pass
