"""PostgreSQL implementation of User repository."""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hublink.domain.error import DuplicateError, NotFoundError
from hublink.domain.model import LocalUser
from hublink.domain.repository import UserRepository
from hublink.domain.value import UserField, UserId
from hublink.persistence.database import storage_errors
from hublink.persistence.mappers import row_to_user
from hublink.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, username: str, email: str) -> UserId:
        """Insert a new user.

        The insert runs in a savepoint so a unique violation leaves the
        request transaction usable for a retry.

        Args:
            username: Unique username
            email: Email address, unique regardless of case

        Returns:
            ID of the new user

        Raises:
            DuplicateError: If the username or email is taken
        """
        stmt = (
            users_table.insert()
            .values(username=username, email=email)
            .returning(users_table.c.id)
        )
        with storage_errors("create user"):
            try:
                async with self.session.begin_nested():
                    result = await self.session.execute(stmt)
                    user_id = result.scalar_one()
            except IntegrityError as e:
                constraint = str(e.orig)
                if "username" in constraint:
                    raise DuplicateError("username", username) from e
                raise DuplicateError("email", email) from e
        return UserId(user_id)

    async def find_by_id(self, user_id: UserId) -> Optional[LocalUser]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        with storage_errors("load user"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_username(self, username: str) -> Optional[LocalUser]:
        """Find a user by username.

        Args:
            username: Username to search for

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.username == username)
        with storage_errors("load user"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_uid_by_email(self, email: str) -> Optional[UserId]:
        """Find the ID of the user owning an email, ignoring case.

        Args:
            email: Email to search for

        Returns:
            User ID if found, None otherwise
        """
        stmt = select(users_table.c.id).where(
            func.lower(users_table.c.email) == email.lower()
        )
        with storage_errors("look up email"):
            result = await self.session.execute(stmt)
            user_id = result.scalar_one_or_none()
        return UserId(user_id) if user_id else None

    async def get_field(self, user_id: UserId, field: UserField) -> Any:
        """Read one column of a user."""
        values = await self.get_fields(user_id, [field])
        return values[field]

    async def get_fields(
        self, user_id: UserId, fields: list[UserField]
    ) -> dict[UserField, Any]:
        """Read several columns of a user.

        Args:
            user_id: User ID
            fields: Columns to read

        Returns:
            Mapping of field to value

        Raises:
            NotFoundError: If the user does not exist
        """
        columns = [users_table.c[field.value] for field in fields]
        stmt = select(*columns).where(users_table.c.id == user_id)
        with storage_errors("read user fields"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        if not row:
            raise NotFoundError("User", str(user_id))
        return {field: row[field.value] for field in fields}

    async def set_field(self, user_id: UserId, field: UserField, value: Any) -> None:
        """Write one column of a user.

        Args:
            user_id: User ID
            field: Column to write
            value: New value, None clears it
        """
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values(
                {
                    field.value: value,
                    "updated_at": datetime.now(timezone.utc),
                }
            )
        )
        with storage_errors("update user field"):
            await self.session.execute(stmt)
            await self.session.flush()
