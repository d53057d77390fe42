"""In-memory repository implementations for testing."""

from .admin_settings import InMemoryAdminSettingsRepository
from .identity_index import InMemoryIdentityIndexRepository
from .pending_validation import InMemoryPendingValidationRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryAdminSettingsRepository",
    "InMemoryIdentityIndexRepository",
    "InMemoryPendingValidationRepository",
    "InMemoryUserRepository",
]
