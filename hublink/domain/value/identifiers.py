"""Strongly typed identifiers for domain entities.

Using NewType for strong typing prevents mixing up local user IDs with
the opaque string IDs handed out by external providers.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)

# Stable account ID issued by the external provider (GitHub's numeric ID as text)
ExternalId = NewType("ExternalId", str)
