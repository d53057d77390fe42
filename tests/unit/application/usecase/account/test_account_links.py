"""Unit tests for GetAssociationsUseCase and UnlinkUseCase."""

import pytest

from hublink.application.usecase.account import GetAssociationsUseCase, UnlinkUseCase
from hublink.domain.error import NotAuthenticatedError
from hublink.domain.repository import IdentityIndexRepository
from hublink.domain.service import IdentityLinker, UserService
from hublink.domain.value import ExternalId
from tests.fakes import FakeSession, make_identity
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetAssociationsUseCase:
    """Tests for GetAssociationsUseCase."""

    @pytest.mark.asyncio
    async def test_lists_github_association(self, unit_env):
        # Arrange
        linker = await unit_env.get(IdentityLinker)
        use_case = await unit_env.get(GetAssociationsUseCase)
        account = await linker.resolve_login(make_identity(), FakeSession())

        # Act
        response = await use_case.execute(FakeSession(account.user_id))

        # Assert
        assert len(response.associations) == 1
        association = response.associations[0]
        assert association.associated is True
        assert association.provider_name == "GitHub"
        assert association.action_url.endswith("/deauth/github")

    @pytest.mark.asyncio
    async def test_requires_signed_in_user(self, unit_env):
        use_case = await unit_env.get(GetAssociationsUseCase)

        with pytest.raises(NotAuthenticatedError):
            await use_case.execute(FakeSession())


class TestUnlinkUseCase:
    """Tests for UnlinkUseCase."""

    @pytest.mark.asyncio
    async def test_unlinks_session_user(self, unit_env):
        """The signed-in owner's link should be removed."""
        # Arrange
        linker = await unit_env.get(IdentityLinker)
        index = await unit_env.get(IdentityIndexRepository)
        use_case = await unit_env.get(UnlinkUseCase)
        account = await linker.resolve_login(make_identity(), FakeSession())

        # Act
        response = await use_case.execute(FakeSession(account.user_id))

        # Assert
        assert response.user_id == str(account.user_id)
        assert await index.get(ExternalId("583231")) is None

    @pytest.mark.asyncio
    async def test_only_touches_session_user(self, unit_env):
        """Another user's link must survive an unlink request."""
        # Arrange
        linker = await unit_env.get(IdentityLinker)
        user_service = await unit_env.get(UserService)
        index = await unit_env.get(IdentityIndexRepository)
        use_case = await unit_env.get(UnlinkUseCase)
        owner = await linker.resolve_login(make_identity(), FakeSession())
        other = await user_service.create_user("mallory", "mallory@example.com")

        # Act
        await use_case.execute(FakeSession(other))

        # Assert
        assert await index.get(ExternalId("583231")) == owner.user_id

    @pytest.mark.asyncio
    async def test_requires_signed_in_user(self, unit_env):
        use_case = await unit_env.get(UnlinkUseCase)

        with pytest.raises(NotAuthenticatedError):
            await use_case.execute(FakeSession())
