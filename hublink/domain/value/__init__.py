"""Domain value objects for hublink."""

from hublink.domain.value.identifiers import ExternalId, UserId
from hublink.domain.value.types import (
    GITHUB,
    AssociationInfo,
    ExternalIdentity,
    LocalAccountRef,
    ProviderDescriptor,
    Resolution,
    UserField,
)

__all__ = [
    # Identifiers
    "UserId",
    "ExternalId",
    # Types
    "AssociationInfo",
    "ExternalIdentity",
    "GITHUB",
    "LocalAccountRef",
    "ProviderDescriptor",
    "Resolution",
    "UserField",
]
