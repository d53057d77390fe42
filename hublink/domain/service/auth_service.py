"""Authentication domain service."""

from hublink.domain.value import ExternalIdentity, ProviderDescriptor

from .base import Service


class OAuthClient:
    """OAuth client interface for the identity provider."""

    provider: ProviderDescriptor

    async def initiate_authorization(self, state: str) -> str:
        """Initiate OAuth authorization flow.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        raise NotImplementedError

    async def complete_authorization(self, code: str, state: str) -> ExternalIdentity:
        """Complete OAuth authorization flow.

        Args:
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Verified identity from the provider
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for the OAuth handshake.

    Thin facade over the provider client so use cases never talk to the
    adapter directly.
    """

    def __init__(self, oauth_client: OAuthClient) -> None:
        """Initialize auth service.

        Args:
            oauth_client: Provider OAuth client
        """
        self.oauth_client = oauth_client

    @property
    def provider(self) -> ProviderDescriptor:
        """Provider handled by this service."""
        return self.oauth_client.provider

    async def initiate_login(self, state: str) -> str:
        """Initiate OAuth login flow.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        return await self.oauth_client.initiate_authorization(state)

    async def complete_login(self, code: str, state: str) -> ExternalIdentity:
        """Complete OAuth login flow.

        Args:
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Verified identity from the provider
        """
        return await self.oauth_client.complete_authorization(code, state)
