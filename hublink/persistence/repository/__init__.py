"""PostgreSQL repository implementations."""

from hublink.persistence.repository.admin_settings import (
    PostgresAdminSettingsRepository,
)
from hublink.persistence.repository.identity_index import (
    PostgresIdentityIndexRepository,
)
from hublink.persistence.repository.pending_validation import (
    PostgresPendingValidationRepository,
)
from hublink.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresAdminSettingsRepository",
    "PostgresIdentityIndexRepository",
    "PostgresPendingValidationRepository",
    "PostgresUserRepository",
]
