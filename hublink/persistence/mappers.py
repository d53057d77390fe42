"""Mappers for converting between database rows and domain models.

Domain models are frozen pydantic models, so rows are mapped by hand.
"""

from typing import Any, Dict
from uuid import UUID

from hublink.domain.model import LocalUser
from hublink.domain.value import ExternalId, UserId


def row_to_user(row: Dict[str, Any]) -> LocalUser:
    """Convert database row to LocalUser domain model.

    Args:
        row: Database row as dict

    Returns:
        LocalUser domain model
    """
    external_id = row.get("external_id")
    return LocalUser(
        id=UserId(UUID(row["id"]) if isinstance(row["id"], str) else row["id"]),
        username=row["username"],
        email=row["email"],
        email_confirmed=row["email_confirmed"],
        fullname=row.get("fullname"),
        picture=row.get("picture"),
        uploaded_picture=row.get("uploaded_picture"),
        external_id=ExternalId(external_id) if external_id else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
