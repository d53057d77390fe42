"""In-memory admin settings for testing."""

from hublink.domain.repository import AdminSettingsRepository


class InMemoryAdminSettingsRepository(AdminSettingsRepository):
    """In-memory implementation of AdminSettingsRepository for testing.

    Flip ``registration_disabled`` to exercise the registration gate.
    """

    def __init__(self, registration_disabled: bool = False) -> None:
        self.registration_disabled = registration_disabled

    async def is_registration_disabled(self) -> bool:
        """Return the current toggle."""
        return self.registration_disabled
