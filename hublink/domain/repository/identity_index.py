"""Identity index repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from hublink.domain.value import ExternalId, UserId


class IdentityIndexRepository(ABC):
    """Maps external provider IDs to local user IDs.

    Each external ID maps to at most one user. The reverse direction is
    the user's own external_id field; both are written side by side.
    """

    @abstractmethod
    async def get(self, external_id: ExternalId) -> Optional[UserId]:
        """Look up the user linked to an external ID.

        Args:
            external_id: Provider account ID

        Returns:
            Linked user ID, or None if the external ID is unknown
        """
        pass

    @abstractmethod
    async def set(self, external_id: ExternalId, user_id: UserId) -> None:
        """Create or overwrite the entry for an external ID.

        Args:
            external_id: Provider account ID
            user_id: Local user to link
        """
        pass

    @abstractmethod
    async def delete(self, external_id: ExternalId) -> None:
        """Remove the entry for an external ID. Absent entries are ignored.

        Args:
            external_id: Provider account ID
        """
        pass
