"""GitHub OAuth client implementation.

Implements the OAuth 2.0 authorization code flow against GitHub and
turns the user's profile into an ExternalIdentity.
"""

from urllib.parse import urlencode

import httpx
import logfire

from hublink.adapter.error import ProviderError
from hublink.domain.service.auth_service import OAuthClient
from hublink.domain.value import GITHUB, ExternalId, ExternalIdentity


class GitHubOAuthError(ProviderError):
    """GitHub OAuth error."""

    pass


class GitHubOAuthClient(OAuthClient):
    """Base class for GitHub OAuth clients.

    Provides type distinction for dependency injection.
    """

    provider = GITHUB


class RealGitHubOAuthClient(GitHubOAuthClient):
    """GitHub OAuth client.

    Requests the ``user:email`` scope so private addresses can be read
    from the emails endpoint when the public profile has none.
    """

    authorize_url = "https://github.com/login/oauth/authorize"
    token_url = "https://github.com/login/oauth/access_token"
    user_info_url = "https://api.github.com/user"
    user_emails_url = "https://api.github.com/user/emails"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scope: str = "user:email",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize GitHub OAuth client.

        Args:
            client_id: GitHub OAuth app client ID
            client_secret: GitHub OAuth app client secret
            redirect_uri: Callback URL registered with GitHub
            scope: Requested OAuth scopes
            transport: httpx transport override, used by tests
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.scope = scope
        self.transport = transport

    async def initiate_authorization(self, state: str) -> str:
        """Build the GitHub authorization URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": self.scope,
            "state": state,
        }

        logfire.info(
            "GitHub OAuth authorization initiated",
            state=state,
            redirect_uri=self.redirect_uri,
        )

        return f"{self.authorize_url}?{urlencode(params)}"

    async def complete_authorization(self, code: str, state: str) -> ExternalIdentity:
        """Complete GitHub OAuth authorization flow.

        The caller has already matched ``state`` against the browser that
        started the flow.

        Args:
            code: Authorization code from GitHub callback
            state: State parameter, used for logging only

        Returns:
            Verified identity from GitHub

        Raises:
            GitHubOAuthError: If any request to GitHub fails
        """
        async with httpx.AsyncClient(
            timeout=30.0, transport=self.transport
        ) as client:
            access_token = await self._exchange_code_for_token(client, code)
            user_info = await self._get_user_info(client, access_token)

            email = user_info.get("email") or ""
            if not email:
                email = await self._get_primary_email(client, access_token)

        logfire.info(
            "GitHub OAuth completed",
            state=state,
            username=user_info["login"],
            external_id=user_info["id"],
            has_email=bool(email),
        )

        return ExternalIdentity(
            external_id=ExternalId(str(user_info["id"])),
            display_name=user_info.get("name"),
            username=user_info["login"],
            email=email,
            avatar_url=user_info.get("avatar_url"),
        )

    async def _exchange_code_for_token(self, client: httpx.AsyncClient, code: str) -> str:
        """Exchange authorization code for access token.

        Raises:
            GitHubOAuthError: If token exchange fails
        """
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "redirect_uri": self.redirect_uri,
        }

        try:
            response = await client.post(
                self.token_url,
                data=data,
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            logfire.error("GitHub token exchange HTTP error", error=str(e))
            raise GitHubOAuthError(f"HTTP error during token exchange: {e}")

        if response.status_code != 200:
            logfire.error(
                "GitHub token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise GitHubOAuthError(f"Token exchange failed: {response.status_code}")

        result = response.json()
        # GitHub reports bad codes with 200 and an error body
        if "access_token" not in result:
            logfire.error(
                "GitHub token exchange rejected",
                error=result.get("error"),
                description=result.get("error_description"),
            )
            raise GitHubOAuthError(
                f"Token exchange rejected: {result.get('error', 'unknown error')}"
            )
        return result["access_token"]

    async def _get_user_info(
        self, client: httpx.AsyncClient, access_token: str
    ) -> dict:
        """Fetch the authenticated user's profile.

        Raises:
            GitHubOAuthError: If API request fails
        """
        return await self._api_get(client, self.user_info_url, access_token)

    async def _get_primary_email(
        self, client: httpx.AsyncClient, access_token: str
    ) -> str:
        """Pick the primary verified address, falling back to any verified one.

        Returns:
            Email address, or an empty string if none is verified
        """
        emails = await self._api_get(client, self.user_emails_url, access_token)
        verified = [e for e in emails if e.get("verified")]
        for entry in verified:
            if entry.get("primary"):
                return entry["email"]
        return verified[0]["email"] if verified else ""

    async def _api_get(self, client: httpx.AsyncClient, url: str, access_token: str):
        try:
            response = await client.get(
                url,
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Accept": "application/vnd.github+json",
                },
            )
        except httpx.HTTPError as e:
            logfire.error("GitHub API HTTP error", url=url, error=str(e))
            raise GitHubOAuthError(f"HTTP error calling {url}: {e}")

        if response.status_code != 200:
            logfire.error(
                "GitHub API request failed",
                url=url,
                status_code=response.status_code,
                error=response.text,
            )
            raise GitHubOAuthError(f"GitHub API request failed: {response.status_code}")

        return response.json()


class MockGitHubOAuthClient(GitHubOAuthClient):
    """Mock GitHub OAuth client for testing.

    Returns a deterministic identity without making real API calls.
    Tests may replace ``identity`` to simulate other accounts.
    """

    def __init__(self, identity: ExternalIdentity | None = None):
        """Initialize mock client without real OAuth configuration."""
        self.identity = identity or ExternalIdentity(
            external_id=ExternalId("1001"),
            display_name="Mock GitHub User",
            username="mockuser",
            email="mock@example.com",
            avatar_url="https://avatars.githubusercontent.com/u/1001",
        )

    async def initiate_authorization(self, state: str) -> str:
        """Return mock authorization URL."""
        return f"https://github.com/login/oauth/authorize?state={state}&mock=true"

    async def complete_authorization(self, code: str, state: str) -> ExternalIdentity:
        """Return the configured identity."""
        return self.identity
