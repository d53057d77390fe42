"""PostgreSQL implementation of the pending validation registry."""

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from hublink.domain.repository import PendingValidationRepository
from hublink.domain.value import UserId
from hublink.persistence.database import storage_errors
from hublink.persistence.tables import pending_validations_table


class PostgresPendingValidationRepository(PendingValidationRepository):
    """PostgreSQL implementation of PendingValidationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def add(self, user_id: UserId) -> None:
        """Register a user as awaiting validation (idempotent)."""
        stmt = (
            insert(pending_validations_table)
            .values(user_id=user_id)
            .on_conflict_do_nothing(
                index_elements=[pending_validations_table.c.user_id]
            )
        )
        with storage_errors("add pending validation"):
            await self.session.execute(stmt)
            await self.session.flush()

    async def remove(self, user_id: UserId) -> None:
        """Drop a user from the registry."""
        stmt = pending_validations_table.delete().where(
            pending_validations_table.c.user_id == user_id
        )
        with storage_errors("remove pending validation"):
            await self.session.execute(stmt)
            await self.session.flush()

    async def clear_confirmation(self, user_id: UserId) -> None:
        """Forget any confirmation email sent to the user."""
        stmt = (
            pending_validations_table.update()
            .where(pending_validations_table.c.user_id == user_id)
            .values(confirmation_token=None, confirmation_sent_at=None)
        )
        with storage_errors("clear email confirmation"):
            await self.session.execute(stmt)
            await self.session.flush()

    async def is_pending(self, user_id: UserId) -> bool:
        """Check whether a user is awaiting validation."""
        stmt = select(pending_validations_table.c.user_id).where(
            pending_validations_table.c.user_id == user_id
        )
        with storage_errors("read pending validation"):
            result = await self.session.execute(stmt)
            return result.first() is not None
