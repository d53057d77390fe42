"""Mock GitHub providers for testing."""

from dishka import Scope, provide

from hublink.adapter.github import MockGitHubOAuthClient
from hublink.domain.service import OAuthClient
from hublink.util.di.infrastructure.github import GitHubProvider


class MockGitHubProvider(GitHubProvider):
    """Mock GitHub provider using the deterministic OAuth client.

    Tests change the returned identity through ``client.identity``.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_github_oauth_client(self) -> OAuthClient:
        """Provide mock GitHub OAuth client."""
        return MockGitHubOAuthClient()
