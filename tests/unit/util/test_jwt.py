"""Unit tests for JWT helpers."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from hublink.config import AuthSettings
from hublink.util.jwt import JWTError, create_token, verify_token


class TestJWT:
    """Tests for create_token / verify_token."""

    def test_token_carries_user(self):
        # Arrange
        settings = AuthSettings(jwt_secret="secret")

        # Act
        payload = verify_token(create_token("user-1", "octocat", settings), settings)

        # Assert
        assert payload.user_id == "user-1"
        assert payload.username == "octocat"
        assert payload.exp > datetime.now(timezone.utc) + timedelta(days=29)

    def test_wrong_secret_rejected(self):
        token = create_token("user-1", "octocat", AuthSettings(jwt_secret="secret"))

        with pytest.raises(JWTError, match="Invalid token"):
            verify_token(token, AuthSettings(jwt_secret="other"))

    def test_expired_token_rejected(self):
        # Arrange
        settings = AuthSettings(jwt_secret="secret")
        token = jwt.encode(
            {
                "user_id": "user-1",
                "username": "octocat",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            "secret",
            algorithm="HS256",
        )

        # Act / Assert
        with pytest.raises(JWTError, match="expired"):
            verify_token(token, settings)
