"""Get associations use case."""

from pydantic import BaseModel

from hublink.domain.error import NotAuthenticatedError
from hublink.domain.service import IdentityLinker, SessionContext
from hublink.domain.value import AssociationInfo


class GetAssociationsResponse(BaseModel):
    """Linked-account status for the account settings page."""

    associations: list[AssociationInfo]


class GetAssociationsUseCase:
    """Use case for listing the signed-in user's provider links."""

    def __init__(self, identity_linker: IdentityLinker) -> None:
        """Initialize get associations use case.

        Args:
            identity_linker: Identity linking domain service
        """
        self.identity_linker = identity_linker

    async def execute(self, session: SessionContext) -> GetAssociationsResponse:
        """Execute get associations flow.

        Args:
            session: Authentication state of the current request

        Returns:
            One entry per supported provider

        Raises:
            NotAuthenticatedError: If nobody is signed in
        """
        user_id = await session.current_uid()
        if user_id is None:
            raise NotAuthenticatedError("view linked accounts")

        association = await self.identity_linker.get_association_status(user_id)
        return GetAssociationsResponse(associations=[association])
