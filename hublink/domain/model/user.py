"""Local user account.

Accounts are created by email/password signup elsewhere in the host
application or provisioned here on first SSO login.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from hublink.domain.model.common import DomainModel
from hublink.domain.value import ExternalId, UserId


class LocalUser(DomainModel):
    """Local user account with at most one linked external identity."""

    id: UserId
    username: str
    email: str
    email_confirmed: bool = False
    fullname: Optional[str] = None
    picture: Optional[str] = None
    uploaded_picture: Optional[str] = None
    external_id: Optional[ExternalId] = None  # Mirrors the identity index entry
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
