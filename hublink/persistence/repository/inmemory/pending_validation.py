"""In-memory pending validation registry for testing."""

from hublink.domain.repository import PendingValidationRepository
from hublink.domain.value import UserId


class InMemoryPendingValidationRepository(PendingValidationRepository):
    """In-memory implementation of PendingValidationRepository for testing.

    ``confirmation_tokens`` stands in for tokens written by the host's
    confirmation mailer; tests seed it directly.
    """

    def __init__(self) -> None:
        self._pending: set[UserId] = set()
        self.confirmation_tokens: dict[UserId, str] = {}

    async def add(self, user_id: UserId) -> None:
        """Register a user as awaiting validation."""
        self._pending.add(user_id)

    async def remove(self, user_id: UserId) -> None:
        """Drop a user from the registry."""
        self._pending.discard(user_id)

    async def clear_confirmation(self, user_id: UserId) -> None:
        """Forget any confirmation email sent to the user."""
        self.confirmation_tokens.pop(user_id, None)

    async def is_pending(self, user_id: UserId) -> bool:
        """Check whether a user is awaiting validation."""
        return user_id in self._pending
