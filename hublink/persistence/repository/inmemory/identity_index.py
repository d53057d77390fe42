"""In-memory identity index for testing."""

from typing import Optional

from hublink.domain.repository import IdentityIndexRepository
from hublink.domain.value import ExternalId, UserId


class InMemoryIdentityIndexRepository(IdentityIndexRepository):
    """In-memory implementation of IdentityIndexRepository for testing."""

    def __init__(self) -> None:
        self._entries: dict[ExternalId, UserId] = {}

    async def get(self, external_id: ExternalId) -> Optional[UserId]:
        """Look up the user linked to an external ID."""
        return self._entries.get(external_id)

    async def set(self, external_id: ExternalId, user_id: UserId) -> None:
        """Create or overwrite the entry for an external ID."""
        self._entries[external_id] = user_id

    async def delete(self, external_id: ExternalId) -> None:
        """Remove the entry for an external ID, if any."""
        self._entries.pop(external_id, None)
