"""PostgreSQL implementation of the identity index."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from hublink.domain.repository import IdentityIndexRepository
from hublink.domain.value import ExternalId, UserId
from hublink.persistence.database import storage_errors
from hublink.persistence.tables import identity_index_table


class PostgresIdentityIndexRepository(IdentityIndexRepository):
    """PostgreSQL implementation of IdentityIndexRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def get(self, external_id: ExternalId) -> Optional[UserId]:
        """Look up the user linked to an external ID."""
        stmt = select(identity_index_table.c.user_id).where(
            identity_index_table.c.external_id == external_id
        )
        with storage_errors("read identity index"):
            result = await self.session.execute(stmt)
            user_id = result.scalar_one_or_none()
        return UserId(user_id) if user_id else None

    async def set(self, external_id: ExternalId, user_id: UserId) -> None:
        """Upsert the entry for an external ID.

        Args:
            external_id: Provider account ID
            user_id: Local user to link
        """
        stmt = insert(identity_index_table).values(
            external_id=external_id, user_id=user_id
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[identity_index_table.c.external_id],
            set_={"user_id": stmt.excluded.user_id},
        )
        with storage_errors("write identity index"):
            await self.session.execute(stmt)
            await self.session.flush()

    async def delete(self, external_id: ExternalId) -> None:
        """Delete the entry for an external ID, if any."""
        stmt = identity_index_table.delete().where(
            identity_index_table.c.external_id == external_id
        )
        with storage_errors("delete identity index entry"):
            await self.session.execute(stmt)
            await self.session.flush()
