"""Domain layer DI providers."""

from dishka import Scope, provide

from hublink.config import AuthSettings, Settings
from hublink.domain.repository import (
    AdminSettingsRepository,
    IdentityIndexRepository,
    PendingValidationRepository,
    UserRepository,
)
from hublink.domain.service import (
    AuthService,
    IdentityLinker,
    JWTService,
    OAuthClient,
    UserService,
)
from hublink.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(self, oauth_client: OAuthClient) -> AuthService:
        """Provide authentication domain service."""
        return AuthService(oauth_client=oauth_client)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(
        self,
        user_repository: UserRepository,
        pending_validation_repository: PendingValidationRepository,
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository,
            pending_validation_repository=pending_validation_repository,
        )

    @provide
    def get_identity_linker(
        self,
        user_service: UserService,
        identity_index_repository: IdentityIndexRepository,
        pending_validation_repository: PendingValidationRepository,
        admin_settings_repository: AdminSettingsRepository,
        oauth_client: OAuthClient,
        settings: Settings,
    ) -> IdentityLinker:
        """Provide identity linking domain service.

        Admin settings come from a repository read on every resolution,
        so toggling registration takes effect on the next login.
        """
        return IdentityLinker(
            user_service=user_service,
            identity_index_repository=identity_index_repository,
            pending_validation_repository=pending_validation_repository,
            admin_settings_repository=admin_settings_repository,
            provider=oauth_client.provider,
            noreply_domain=settings.auth.github.noreply_domain,
            base_url=settings.api.base_url,
        )
