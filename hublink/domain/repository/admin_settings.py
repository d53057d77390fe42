"""Admin settings repository interface."""

from abc import ABC, abstractmethod


class AdminSettingsRepository(ABC):
    """Administrative toggles for the SSO integration.

    Values are read fresh on every call so changes apply to the next login.
    """

    @abstractmethod
    async def is_registration_disabled(self) -> bool:
        """Check whether new accounts may be created through SSO.

        Returns:
            True if SSO registration is switched off
        """
        pass
