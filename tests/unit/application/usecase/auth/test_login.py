"""Unit tests for LoginUseCase."""

import pytest

from hublink.adapter.github import GitHubOAuthError, MockGitHubOAuthClient
from hublink.application.usecase.auth import LoginUseCase
from hublink.application.usecase.auth.login import LoginRequest
from hublink.domain.error import DuplicateError, RegistrationDisabledError
from hublink.domain.repository import AdminSettingsRepository, UserRepository
from hublink.domain.service import (
    AuthService,
    IdentityLinker,
    OAuthClient,
    UserService,
)
from hublink.domain.value import Resolution
from tests.fakes import FakeSession, make_identity
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class FailingGitHubOAuthClient(MockGitHubOAuthClient):
    async def complete_authorization(self, code, state):
        raise GitHubOAuthError("Token exchange failed: 401")


class RacingIdentityLinker(IdentityLinker):
    """Simulates another callback creating the account first."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.calls = 0

    async def resolve_login(self, identity, session):
        self.calls += 1
        if self.calls == 1:
            await self.user_service.create_user(identity.username, identity.email)
            raise DuplicateError("email", identity.email)
        return await super().resolve_login(identity, session)


class TestLoginUseCase:
    """Tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_first_login_creates_user_and_session(self, unit_env):
        """Login for an unknown identity should create the account and sign in."""
        # Arrange
        login_use_case = await unit_env.get(LoginUseCase)
        session = FakeSession()

        # Act
        response = await login_use_case.execute(
            LoginRequest(code="code_123", state="state_123"), session
        )

        # Assert
        assert response.resolution == Resolution.CREATED
        assert response.username == "mockuser"
        assert [str(uid) for uid in session.established] == [response.user_id]

    @pytest.mark.asyncio
    async def test_second_login_resolves_existing(self, unit_env):
        # Arrange
        login_use_case = await unit_env.get(LoginUseCase)
        first = await login_use_case.execute(
            LoginRequest(code="code_1", state="state_1"), FakeSession()
        )

        # Act
        second = await login_use_case.execute(
            LoginRequest(code="code_2", state="state_2"), FakeSession()
        )

        # Assert
        assert second.user_id == first.user_id
        assert second.resolution == Resolution.EXISTING

    @pytest.mark.asyncio
    async def test_attach_keeps_current_session(self, unit_env):
        """Linking from a signed-in session must not re-issue the session."""
        # Arrange
        user_service = await unit_env.get(UserService)
        login_use_case = await unit_env.get(LoginUseCase)
        signed_in = await user_service.create_user("me", "me@example.com")
        session = FakeSession(signed_in)

        # Act
        response = await login_use_case.execute(
            LoginRequest(code="code", state="state"), session
        )

        # Assert
        assert response.resolution == Resolution.ATTACHED
        assert response.user_id == str(signed_in)
        assert session.established == []

    @pytest.mark.asyncio
    async def test_uses_identity_from_provider(self, unit_env):
        # Arrange
        oauth_client = await unit_env.get(OAuthClient)
        oauth_client.identity = make_identity(username="hubber", email="")
        login_use_case = await unit_env.get(LoginUseCase)
        user_repository = await unit_env.get(UserRepository)

        # Act
        response = await login_use_case.execute(
            LoginRequest(code="code", state="state"), FakeSession()
        )

        # Assert
        user = await user_repository.find_by_username("hubber")
        assert str(user.id) == response.user_id
        assert user.email == "hubber@users.noreply.github.com"

    @pytest.mark.asyncio
    async def test_registration_disabled_propagates(self, unit_env):
        # Arrange
        admin = await unit_env.get(AdminSettingsRepository)
        admin.registration_disabled = True
        login_use_case = await unit_env.get(LoginUseCase)
        session = FakeSession()

        # Act / Assert
        with pytest.raises(RegistrationDisabledError):
            await login_use_case.execute(
                LoginRequest(code="code", state="state"), session
            )

        assert session.established == []

    @pytest.mark.asyncio
    async def test_provider_error_propagates(self, unit_env):
        """OAuth failures should surface before any account work."""
        # Arrange
        login_use_case = LoginUseCase(
            auth_service=AuthService(oauth_client=FailingGitHubOAuthClient()),
            identity_linker=await unit_env.get(IdentityLinker),
            user_service=await unit_env.get(UserService),
        )

        # Act / Assert
        with pytest.raises(GitHubOAuthError):
            await login_use_case.execute(
                LoginRequest(code="bad", state="state"), FakeSession()
            )

    @pytest.mark.asyncio
    async def test_duplicate_on_creation_is_retried(self, unit_env):
        """A concurrent creation should be resolved by retrying once."""
        # Arrange
        linker = await unit_env.get(IdentityLinker)
        racing_linker = RacingIdentityLinker(
            user_service=linker.user_service,
            identity_index_repository=linker.identity_index_repository,
            pending_validation_repository=linker.pending_validation_repository,
            admin_settings_repository=linker.admin_settings_repository,
            provider=linker.provider,
            noreply_domain=linker.noreply_domain,
            base_url=linker.base_url,
        )
        login_use_case = LoginUseCase(
            auth_service=await unit_env.get(AuthService),
            identity_linker=racing_linker,
            user_service=await unit_env.get(UserService),
        )

        # Act
        response = await login_use_case.execute(
            LoginRequest(code="code", state="state"), FakeSession()
        )

        # Assert
        assert racing_linker.calls == 2
        assert response.resolution == Resolution.MERGED
