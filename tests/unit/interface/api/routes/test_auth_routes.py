"""Route tests for sign-in, account linking and deauthorization."""

from urllib.parse import parse_qs, urlparse

import httpx
import pytest
import pytest_asyncio

from hublink.adapter.github import GitHubOAuthError
from hublink.config import Settings
from hublink.domain.repository import AdminSettingsRepository
from hublink.domain.service import OAuthClient
from hublink.interface.api.app import create_app
from tests.di import build_test_container
from tests.fakes import make_identity


@pytest_asyncio.fixture
async def container():
    container = build_test_container()
    yield container
    await container.close()


@pytest_asyncio.fixture
async def client(container):
    app = create_app(container=container)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport, base_url="http://testserver"
    ) as client:
        yield client


@pytest_asyncio.fixture
async def settings(container) -> Settings:
    return await container.get(Settings)


async def start_login(client: httpx.AsyncClient) -> str:
    """Begin the OAuth flow and return the state handed to GitHub."""
    response = await client.get("/auth/github")
    assert response.status_code == 302
    return parse_qs(urlparse(response.headers["location"]).query)["state"][0]


async def sign_in(client: httpx.AsyncClient) -> httpx.Response:
    state = await start_login(client)
    response = await client.get(
        "/auth/github/callback", params={"code": "code", "state": state}
    )
    assert response.status_code == 302
    return response


class TestLogin:
    """Tests for the GitHub sign-in flow."""

    @pytest.mark.asyncio
    async def test_initiate_redirects_to_github(self, client):
        # Act
        response = await client.get("/auth/github")

        # Assert
        assert response.status_code == 302
        location = urlparse(response.headers["location"])
        assert location.netloc == "github.com"
        assert parse_qs(location.query)["state"][0]

    @pytest.mark.asyncio
    async def test_initiate_sets_state_cookie(self, client):
        # Act
        response = await client.get("/auth/github")

        # Assert
        state = parse_qs(urlparse(response.headers["location"]).query)["state"][0]
        assert response.cookies.get("oauth_state") == state
        set_cookie = response.headers["set-cookie"].lower()
        assert "httponly" in set_cookie
        assert "max-age=600" in set_cookie

    @pytest.mark.asyncio
    async def test_callback_sets_cookie_and_redirects(self, client, settings):
        """Successful callback should sign the user in and go to the frontend."""
        # Act
        response = await sign_in(client)

        # Assert
        assert response.headers["location"] == settings.api.frontend_url
        assert response.cookies.get("auth_token")

    @pytest.mark.asyncio
    async def test_callback_clears_state_cookie(self, client):
        # Act
        await sign_in(client)

        # Assert
        assert "oauth_state" not in client.cookies

    @pytest.mark.asyncio
    async def test_callback_without_state_cookie_is_rejected(self, client):
        """A callback from a browser that never started the flow must not sign in."""
        # Act
        response = await client.get(
            "/auth/github/callback", params={"code": "code", "state": "state"}
        )

        # Assert
        assert response.status_code == 302
        location = urlparse(response.headers["location"])
        assert location.path == "/auth/error"
        assert parse_qs(location.query)["error"] == ["invalid_state"]
        assert "auth_token" not in response.cookies
        assert (await client.get("/auth/me")).json()["authenticated"] is False

    @pytest.mark.asyncio
    async def test_callback_with_mismatched_state_is_rejected(self, client):
        # Arrange
        await start_login(client)

        # Act
        response = await client.get(
            "/auth/github/callback",
            params={"code": "code", "state": "attacker-state"},
        )

        # Assert
        query = parse_qs(urlparse(response.headers["location"]).query)
        assert query["error"] == ["invalid_state"]
        assert "auth_token" not in response.cookies
        assert (await client.get("/auth/me")).json()["authenticated"] is False

    @pytest.mark.asyncio
    async def test_me_after_login(self, client):
        # Arrange
        await sign_in(client)

        # Act
        response = await client.get("/auth/me")

        # Assert
        data = response.json()
        assert data["authenticated"] is True
        assert data["user"]["username"] == "mockuser"
        assert data["user"]["external_id"] == "1001"
        assert data["user"]["email_confirmed"] is True

    @pytest.mark.asyncio
    async def test_me_without_cookie(self, client):
        response = await client.get("/auth/me")

        assert response.status_code == 200
        assert response.json() == {"authenticated": False, "user": None}

    @pytest.mark.asyncio
    async def test_me_with_invalid_token(self, client):
        # Arrange
        client.cookies.set("auth_token", "not-a-jwt")

        # Act
        response = await client.get("/auth/me")

        # Assert
        assert response.json()["authenticated"] is False

    @pytest.mark.asyncio
    async def test_registration_disabled_redirects_to_error_page(
        self, client, container, settings
    ):
        # Arrange
        admin = await container.get(AdminSettingsRepository)
        admin.registration_disabled = True

        # Act
        response = await sign_in(client)

        # Assert
        location = urlparse(response.headers["location"])
        assert location.path == "/auth/error"
        query = parse_qs(location.query)
        assert query["error"] == ["registration_disabled"]
        assert "GitHub" in query["message"][0]
        assert "auth_token" not in response.cookies

    @pytest.mark.asyncio
    async def test_provider_failure_redirects_to_error_page(
        self, client, container, monkeypatch
    ):
        # Arrange
        oauth_client = await container.get(OAuthClient)

        async def fail(code, state):
            raise GitHubOAuthError("Invalid or expired state")

        monkeypatch.setattr(oauth_client, "complete_authorization", fail)

        # Act
        response = await sign_in(client)

        # Assert
        query = parse_qs(urlparse(response.headers["location"]).query)
        assert query["error"] == ["auth_failed"]

    @pytest.mark.asyncio
    async def test_logout_clears_cookie(self, client):
        # Arrange
        await sign_in(client)

        # Act
        response = await client.post("/auth/logout")

        # Assert
        assert response.status_code == 200
        assert response.json()["success"] is True
        assert "auth_token" in response.headers["set-cookie"]
        assert (await client.get("/auth/me")).json()["authenticated"] is False


class TestLinking:
    """Tests for linking GitHub from a signed-in session."""

    @pytest.mark.asyncio
    async def test_callback_with_session_links_and_returns_to_profile(
        self, client, container, settings
    ):
        """A signed-in callback should attach the new identity, not log in."""
        # Arrange
        await sign_in(client)
        oauth_client = await container.get(OAuthClient)
        oauth_client.identity = make_identity(
            external_id="2002", username="second", email="second@example.com"
        )

        # Act
        response = await sign_in(client)

        # Assert
        assert response.headers["location"] == f"{settings.api.frontend_url}/me/edit"
        assert "auth_token" not in response.cookies
        me = (await client.get("/auth/me")).json()
        assert me["user"]["username"] == "mockuser"
        assert me["user"]["external_id"] == "2002"

    @pytest.mark.asyncio
    async def test_forged_callback_does_not_link_attacker_identity(
        self, client, container
    ):
        """A callback carrying someone else's state must not touch the session."""
        # Arrange
        await sign_in(client)
        oauth_client = await container.get(OAuthClient)
        oauth_client.identity = make_identity(
            external_id="6666", username="attacker", email="attacker@example.com"
        )

        # Act
        response = await client.get(
            "/auth/github/callback",
            params={"code": "attacker-code", "state": "attacker-state"},
        )

        # Assert
        query = parse_qs(urlparse(response.headers["location"]).query)
        assert query["error"] == ["invalid_state"]
        me = (await client.get("/auth/me")).json()
        assert me["user"]["external_id"] == "1001"


class TestAssociations:
    """Tests for the linked-accounts listing."""

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client):
        response = await client.get("/users/me/associations")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_lists_github(self, client, settings):
        # Arrange
        await sign_in(client)

        # Act
        response = await client.get("/users/me/associations")

        # Assert
        assert response.status_code == 200
        assert response.json()["associations"] == [
            {
                "associated": True,
                "provider_name": "GitHub",
                "icon": "fa-github",
                "action_url": f"{settings.api.base_url}/deauth/github",
            }
        ]


class TestDeauth:
    """Tests for the deauthorization page and form."""

    @pytest.mark.asyncio
    async def test_confirmation_requires_authentication(self, client):
        response = await client.get("/deauth/github")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_confirmation_names_service(self, client):
        # Arrange
        await sign_in(client)

        # Act
        response = await client.get("/deauth/github")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "GitHub"
        assert data["associated"] is True

    @pytest.mark.asyncio
    async def test_post_unlinks_and_redirects(self, client, settings):
        """Deauthorizing should drop the link and return to the profile editor."""
        # Arrange
        await sign_in(client)

        # Act
        response = await client.post(
            "/deauth/github", headers={"Origin": settings.api.frontend_url}
        )

        # Assert
        assert response.status_code == 302
        assert response.headers["location"] == f"{settings.api.frontend_url}/me/edit"
        associations = (await client.get("/users/me/associations")).json()
        assert associations["associations"][0]["associated"] is False
        assert associations["associations"][0]["action_url"].endswith("/auth/github")

    @pytest.mark.asyncio
    async def test_post_requires_authentication(self, client, settings):
        response = await client.post(
            "/deauth/github", headers={"Origin": settings.api.frontend_url}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_post_accepts_same_site_referer(self, client, settings):
        # Arrange
        await sign_in(client)

        # Act
        response = await client.post(
            "/deauth/github",
            headers={"Referer": f"{settings.api.frontend_url}/me/edit"},
        )

        # Assert
        assert response.status_code == 302

    @pytest.mark.asyncio
    async def test_post_from_foreign_origin_is_rejected(self, client):
        """A cross-site form post must not unlink the account."""
        # Arrange
        await sign_in(client)

        # Act
        response = await client.post(
            "/deauth/github", headers={"Origin": "https://evil.example"}
        )

        # Assert
        assert response.status_code == 403
        associations = (await client.get("/users/me/associations")).json()
        assert associations["associations"][0]["associated"] is True

    @pytest.mark.asyncio
    async def test_post_without_origin_is_rejected(self, client):
        # Arrange
        await sign_in(client)

        # Act
        response = await client.post("/deauth/github")

        # Assert
        assert response.status_code == 403
        associations = (await client.get("/users/me/associations")).json()
        assert associations["associations"][0]["associated"] is True


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
