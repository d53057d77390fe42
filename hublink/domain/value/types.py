"""Domain value objects for account linking.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import field_validator

from hublink.domain.value.common import ValueObject
from hublink.domain.value.identifiers import ExternalId, UserId


class UserField(str, Enum):
    """User columns that may be read and written individually."""

    EMAIL_CONFIRMED = "email_confirmed"
    FULLNAME = "fullname"
    PICTURE = "picture"
    UPLOADED_PICTURE = "uploaded_picture"
    EXTERNAL_ID = "external_id"


class Resolution(str, Enum):
    """How a login was resolved to a local account."""

    ATTACHED = "attached"  # Linked to the user already signed in
    EXISTING = "existing"  # External ID was already linked
    MERGED = "merged"  # Linked to an existing account with the same email
    CREATED = "created"  # New account provisioned


class ProviderDescriptor(ValueObject):
    """Display metadata for the identity provider."""

    name: str  # Human-readable name, e.g. "GitHub"
    slug: str  # Route segment, e.g. "github"
    icon: str  # Icon reference for account pages


GITHUB = ProviderDescriptor(name="GitHub", slug="github", icon="fa-github")


class ExternalIdentity(ValueObject):
    """Verified identity handed over by the provider after the OAuth exchange.

    Missing profile values are normalised to empty strings.
    """

    external_id: ExternalId
    display_name: str = ""
    username: str
    email: str = ""
    avatar_url: str = ""

    @field_validator("external_id", "username")
    @classmethod
    def validate_required(cls, v: str) -> str:
        """Reject blank identifiers."""
        if not v:
            raise ValueError("Value must not be empty")
        return v

    @field_validator("display_name", "email", "avatar_url", mode="before")
    @classmethod
    def none_to_empty(cls, v: str | None) -> str:
        """Treat missing profile values as empty."""
        return v or ""


class LocalAccountRef(ValueObject):
    """Result of resolving a login."""

    user_id: UserId
    resolution: Resolution


class AssociationInfo(ValueObject):
    """Whether a local account is linked, for account settings pages."""

    associated: bool
    provider_name: str
    icon: str
    action_url: str  # Deauthorize URL when linked, start-linking URL otherwise
