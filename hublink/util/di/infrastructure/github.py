"""GitHub infrastructure providers."""

from dishka import Scope, provide

from hublink.adapter.github import RealGitHubOAuthClient
from hublink.config import Settings
from hublink.domain.service import OAuthClient
from hublink.util.di.base import ProviderBase
from hublink.util.error import ConfigurationError


class GitHubProvider(ProviderBase):
    """GitHub component base."""

    __mock_component__ = "github"


class ProdGitHubProvider(GitHubProvider):
    """Production GitHub provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_github_oauth_client(self, settings: Settings) -> OAuthClient:
        """Provide GitHub OAuth client.

        APP-scoped; the client holds only configuration.

        Raises:
            ConfigurationError: If GitHub OAuth credentials are not configured
        """
        github = settings.auth.github
        if not github.client_id:
            raise ConfigurationError("GitHub OAuth client ID must be configured")
        if not github.client_secret:
            raise ConfigurationError("GitHub OAuth client secret must be configured")

        return RealGitHubOAuthClient(
            client_id=github.client_id,
            client_secret=github.client_secret,
            redirect_uri=settings.auth.github_callback_url,
            scope=github.scope,
        )
