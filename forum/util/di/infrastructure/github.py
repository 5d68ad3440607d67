"""GitHub infrastructure providers."""

from dishka import Scope, provide

from forum.adapter.github.client import RealGitHubClient
from forum.config import Settings
from forum.domain.service import RepositoryListingClient
from forum.util.di.base import ProviderBase
from forum.util.observability import instrument_httpx


class GitHubProvider(ProviderBase):
    """GitHub component base."""

    __mock_component__ = "github"


class ProdGitHubProvider(GitHubProvider):
    """Production GitHub provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_repository_listing_client(
        self, settings: Settings
    ) -> RepositoryListingClient:
        """Provide GitHub REST client.

        Works without a token, at the anonymous rate limit.
        """
        instrument_httpx()
        return RealGitHubClient(
            api_url=settings.github.api_url,
            token=settings.github.token,
            timeout=settings.github.timeout_seconds,
        )
