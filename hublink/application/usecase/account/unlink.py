"""Unlink use case."""

import logfire
from pydantic import BaseModel

from hublink.domain.error import NotAuthenticatedError
from hublink.domain.service import IdentityLinker, SessionContext


class UnlinkResponse(BaseModel):
    """Unlink response."""

    user_id: str


class UnlinkUseCase:
    """Use case for removing the provider link from the signed-in user.

    Only the account owner can unlink, so the target is always the
    session user.
    """

    def __init__(self, identity_linker: IdentityLinker) -> None:
        """Initialize unlink use case.

        Args:
            identity_linker: Identity linking domain service
        """
        self.identity_linker = identity_linker

    async def execute(self, session: SessionContext) -> UnlinkResponse:
        """Execute unlink flow.

        Args:
            session: Authentication state of the current request

        Returns:
            The user that was unlinked

        Raises:
            NotAuthenticatedError: If nobody is signed in
            StorageError: If the removal fails
        """
        user_id = await session.current_uid()
        if user_id is None:
            raise NotAuthenticatedError("unlink accounts")

        await self.identity_linker.unlink(user_id)
        logfire.info("Unlink requested by owner", user_id=str(user_id))
        return UnlinkResponse(user_id=str(user_id))
