"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from hublink.domain.error import DuplicateError, NotFoundError
from hublink.domain.repository import PendingValidationRepository, UserRepository
from hublink.domain.service import UserService
from hublink.domain.value import UserField, UserId
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestUserService:
    """Tests for UserService."""

    @pytest.mark.asyncio
    async def test_create_user_registers_pending_validation(self, unit_env):
        """New accounts should await email validation."""
        # Arrange
        user_service = await unit_env.get(UserService)
        pending = await unit_env.get(PendingValidationRepository)

        # Act
        user_id = await user_service.create_user("octocat", "octocat@example.com")

        # Assert
        user = await user_service.get_by_id(user_id)
        assert user.username == "octocat"
        assert user.email_confirmed is False
        assert await pending.is_pending(user_id) is True

    @pytest.mark.asyncio
    async def test_create_user_picks_next_free_username(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        await user_service.create_user("octocat", "a@example.com")
        await user_service.create_user("octocat", "b@example.com")

        # Act
        user_id = await user_service.create_user("octocat", "c@example.com")

        # Assert
        user = await user_service.get_by_id(user_id)
        assert user.username == "octocat-2"

    @pytest.mark.asyncio
    async def test_create_user_duplicate_email_raises(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        await user_service.create_user("octocat", "octocat@example.com")

        # Act / Assert
        with pytest.raises(DuplicateError) as exc_info:
            await user_service.create_user("other", "octocat@example.com")

        assert exc_info.value.field == "email"

    @pytest.mark.asyncio
    async def test_get_by_id_unknown_user_raises(self, unit_env):
        user_service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError):
            await user_service.get_by_id(UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_get_uid_by_email(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        user_id = await user_service.create_user("octocat", "octocat@example.com")

        # Act / Assert
        assert await user_service.get_uid_by_email("octocat@example.com") == user_id
        assert await user_service.get_uid_by_email("nobody@example.com") is None

    @pytest.mark.asyncio
    async def test_set_and_get_fields(self, unit_env):
        """Field writes should be visible through single and bulk reads."""
        # Arrange
        user_service = await unit_env.get(UserService)
        user_repository = await unit_env.get(UserRepository)
        user_id = await user_service.create_user("octocat", "octocat@example.com")

        # Act
        await user_service.set_field(user_id, UserField.FULLNAME, "The Octocat")
        await user_service.set_field(user_id, UserField.EXTERNAL_ID, "583231")

        # Assert
        assert await user_service.get_field(user_id, UserField.FULLNAME) == "The Octocat"
        fields = await user_service.get_fields(
            user_id, [UserField.EXTERNAL_ID, UserField.PICTURE]
        )
        assert fields == {UserField.EXTERNAL_ID: "583231", UserField.PICTURE: None}
        assert (await user_repository.find_by_id(user_id)).external_id == "583231"
