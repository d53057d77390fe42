"""Pending validation repository interface."""

from abc import ABC, abstractmethod

from hublink.domain.value import UserId


class PendingValidationRepository(ABC):
    """Registry of accounts whose email address is not yet confirmed."""

    @abstractmethod
    async def add(self, user_id: UserId) -> None:
        """Register a user as awaiting email validation."""
        pass

    @abstractmethod
    async def remove(self, user_id: UserId) -> None:
        """Drop a user from the registry. Unknown users are ignored."""
        pass

    @abstractmethod
    async def clear_confirmation(self, user_id: UserId) -> None:
        """Forget any confirmation email already sent to the user."""
        pass

    @abstractmethod
    async def is_pending(self, user_id: UserId) -> bool:
        """Check whether a user is awaiting validation."""
        pass
