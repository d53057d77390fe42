"""Repository interfaces for the hublink domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from hublink.domain.repository.admin_settings import AdminSettingsRepository
from hublink.domain.repository.identity_index import IdentityIndexRepository
from hublink.domain.repository.pending_validation import PendingValidationRepository
from hublink.domain.repository.user import UserRepository

__all__ = [
    "AdminSettingsRepository",
    "IdentityIndexRepository",
    "PendingValidationRepository",
    "UserRepository",
]
