"""Application layer DI providers."""

from dishka import Scope, provide

from hublink.application.usecase.account import GetAssociationsUseCase, UnlinkUseCase
from hublink.application.usecase.auth import GetCurrentUserUseCase, LoginUseCase
from hublink.domain.service import (
    AuthService,
    IdentityLinker,
    JWTService,
    UserService,
)
from hublink.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        auth_service: AuthService,
        identity_linker: IdentityLinker,
        user_service: UserService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            auth_service=auth_service,
            identity_linker=identity_linker,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, jwt_service: JWTService, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(jwt_service=jwt_service, user_service=user_service)

    # Account linking use cases
    @provide(scope=Scope.REQUEST)
    def get_associations_use_case(
        self, identity_linker: IdentityLinker
    ) -> GetAssociationsUseCase:
        """Provide get associations use case."""
        return GetAssociationsUseCase(identity_linker=identity_linker)

    @provide(scope=Scope.REQUEST)
    def get_unlink_use_case(self, identity_linker: IdentityLinker) -> UnlinkUseCase:
        """Provide unlink use case."""
        return UnlinkUseCase(identity_linker=identity_linker)
