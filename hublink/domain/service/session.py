"""Session context interface."""

from abc import ABC, abstractmethod
from typing import Optional

from hublink.domain.value import UserId


class SessionContext(ABC):
    """The authentication state of the request being served."""

    @abstractmethod
    async def current_uid(self) -> Optional[UserId]:
        """Return the signed-in user, or None for anonymous requests."""
        pass

    @abstractmethod
    async def establish_session(self, user_id: UserId) -> None:
        """Sign the given user in for the rest of this request and beyond."""
        pass
