"""PostgreSQL implementation of admin settings."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hublink.domain.repository import AdminSettingsRepository
from hublink.persistence.database import storage_errors
from hublink.persistence.tables import admin_settings_table

SETTINGS_NAMESPACE = "sso-github"
DISABLE_REGISTRATION_KEY = "disableRegistration"


class PostgresAdminSettingsRepository(AdminSettingsRepository):
    """Reads SSO toggles from the admin_settings table.

    A missing row falls back to the configured default.
    """

    def __init__(self, session: AsyncSession, default_disabled: bool = False) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            default_disabled: Value used when no setting is stored
        """
        self.session = session
        self.default_disabled = default_disabled

    async def is_registration_disabled(self) -> bool:
        """Check the disableRegistration toggle ("on" means disabled)."""
        stmt = select(admin_settings_table.c.value).where(
            admin_settings_table.c.namespace == SETTINGS_NAMESPACE,
            admin_settings_table.c.key == DISABLE_REGISTRATION_KEY,
        )
        with storage_errors("read admin settings"):
            result = await self.session.execute(stmt)
            value = result.scalar_one_or_none()
        if value is None:
            return self.default_disabled
        return value == "on"
