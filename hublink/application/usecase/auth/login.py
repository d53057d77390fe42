"""Login use case."""

import logfire
from pydantic import BaseModel

from hublink.domain.error import DuplicateError
from hublink.domain.service import (
    AuthService,
    IdentityLinker,
    SessionContext,
    UserService,
)
from hublink.domain.value import Resolution


class LoginRequest(BaseModel):
    """Login request from the OAuth callback."""

    code: str  # OAuth authorization code
    state: str  # State parameter for CSRF verification


class LoginResponse(BaseModel):
    """Login response."""

    user_id: str
    username: str
    resolution: Resolution


class LoginUseCase:
    """Use case for signing in (or linking) with the identity provider."""

    def __init__(
        self,
        auth_service: AuthService,
        identity_linker: IdentityLinker,
        user_service: UserService,
    ) -> None:
        """Initialize login use case.

        Args:
            auth_service: Authentication domain service
            identity_linker: Identity linking domain service
            user_service: User domain service
        """
        self.auth_service = auth_service
        self.identity_linker = identity_linker
        self.user_service = user_service

    async def execute(
        self, request: LoginRequest, session: SessionContext
    ) -> LoginResponse:
        """Execute login flow.

        Steps:
        1. Complete the OAuth exchange and get the verified identity
        2. Resolve the identity to a local account
        3. Sign the account in, unless it was linked to the current session

        A DuplicateError means a concurrent callback created the same
        account first; the resolution is retried once and then takes the
        email-match branch.

        Args:
            request: Login request with OAuth callback parameters
            session: Authentication state of the current request

        Returns:
            Resolved account

        Raises:
            RegistrationDisabledError: If a new account is needed but SSO
                registration is switched off
            StorageError: If persistence fails
        """
        identity = await self.auth_service.complete_login(request.code, request.state)

        logfire.info(
            "OAuth completed",
            provider=self.auth_service.provider.slug,
            external_id=identity.external_id,
            username=identity.username,
        )

        try:
            account = await self.identity_linker.resolve_login(identity, session)
        except DuplicateError as e:
            logfire.warn(
                "Concurrent account creation, retrying resolution",
                external_id=identity.external_id,
                field=e.field,
            )
            account = await self.identity_linker.resolve_login(identity, session)

        if account.resolution != Resolution.ATTACHED:
            await session.establish_session(account.user_id)

        user = await self.user_service.get_by_id(account.user_id)

        return LoginResponse(
            user_id=str(account.user_id),
            username=user.username,
            resolution=account.resolution,
        )
