"""In-memory user repository for testing."""

from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from hublink.domain.error import DuplicateError, NotFoundError
from hublink.domain.model import LocalUser
from hublink.domain.repository import UserRepository
from hublink.domain.value import UserField, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, LocalUser] = {}

    async def create(self, username: str, email: str) -> UserId:
        """Create a user, enforcing unique username and email."""
        for user in self._users.values():
            if user.username == username:
                raise DuplicateError("username", username)
            if user.email.lower() == email.lower():
                raise DuplicateError("email", email)

        user_id = UserId(uuid4())
        self._users[user_id] = LocalUser(id=user_id, username=username, email=email)
        return user_id

    async def save(self, user: LocalUser) -> LocalUser:
        """Store a user as-is (test seeding helper)."""
        self._users[user.id] = user
        return user

    async def find_by_id(self, user_id: UserId) -> Optional[LocalUser]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_username(self, username: str) -> Optional[LocalUser]:
        """Find a user by username."""
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    async def find_uid_by_email(self, email: str) -> Optional[UserId]:
        """Find the ID of the user owning an email, ignoring case."""
        for user in self._users.values():
            if user.email.lower() == email.lower():
                return user.id
        return None

    async def get_field(self, user_id: UserId, field: UserField) -> Any:
        """Read one field of a user."""
        return getattr(self._get(user_id), field.value)

    async def get_fields(
        self, user_id: UserId, fields: list[UserField]
    ) -> dict[UserField, Any]:
        """Read several fields of a user."""
        user = self._get(user_id)
        return {field: getattr(user, field.value) for field in fields}

    async def set_field(self, user_id: UserId, field: UserField, value: Any) -> None:
        """Write one field of a user. Unknown users are ignored, like an UPDATE."""
        user = self._users.get(user_id)
        if user:
            self._users[user_id] = user.model_copy(
                update={field.value: value, "updated_at": datetime.now()}
            )

    def _get(self, user_id: UserId) -> LocalUser:
        user = self._users.get(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))
        return user
