"""Domain model entities for hublink."""

from hublink.domain.model.user import LocalUser

__all__ = ["LocalUser"]
