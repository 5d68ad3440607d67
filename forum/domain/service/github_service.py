"""GitHub repository listing for user profiles."""

from datetime import timedelta

import logfire

from forum.domain.cache import Cache
from forum.domain.model import User
from forum.domain.value import GitHubRepository

from .base import Service


class RepositoryListingClient:
    """Interface for fetching a user's public repositories."""

    async def list_repositories(self, handle: str) -> list[GitHubRepository]:
        """Fetch the public repositories of ``handle``.

        Args:
            handle: GitHub username

        Returns:
            Repositories in provider order

        Raises:
            GitHubAPIError: On network, auth or rate-limit failures
        """
        raise NotImplementedError


class GitHubService(Service):
    """Cached, failure-tolerant repository listing.

    Listings are cached per handle; a failed fetch is logged and cached
    as an empty list for a shorter time so a broken handle or an outage
    does not trigger a fetch on every profile view.
    """

    CACHE_VERSION = "v1"

    def __init__(
        self,
        client: RepositoryListingClient,
        cache: Cache,
        limit: int = 14,
        ttl: timedelta = timedelta(days=7),
        failure_ttl: timedelta = timedelta(days=1),
    ) -> None:
        """Initialize GitHub service.

        Args:
            client: Repository listing client
            cache: Cache for listings
            limit: Repositories kept per user
            ttl: Lifetime of a successful listing
            failure_ttl: Lifetime of the empty listing cached on failure
        """
        self.client = client
        self.cache = cache
        self.limit = limit
        self.ttl = ttl
        self.failure_ttl = failure_ttl

    def cache_key(self, handle: str) -> str:
        return f"github_repositories:{handle}+{self.limit}+{self.CACHE_VERSION}"

    async def github_repositories(self, user: User) -> list[GitHubRepository]:
        """Most watched repositories of the user's GitHub account.

        Never raises for fetch failures; they yield an empty list.

        Args:
            user: Profile owner

        Returns:
            Up to ``limit`` repositories, most watched first
        """
        handle = user.github_handle
        if not handle:
            return []

        key = self.cache_key(handle)
        cached = await self.cache.get(key)
        if cached is not None:
            return [GitHubRepository.model_validate(item) for item in cached]

        with logfire.span("github_service.github_repositories", handle=handle):
            try:
                repositories = await self.client.list_repositories(handle)
            except Exception as e:
                logfire.error(
                    "GitHub repository fetch failed",
                    handle=handle,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                await self.cache.set(key, [], self.failure_ttl)
                return []

            top = sorted(repositories, key=lambda r: r.watchers, reverse=True)[
                : self.limit
            ]
            await self.cache.set(key, [r.model_dump() for r in top], self.ttl)
            logfire.info("GitHub repositories cached", handle=handle, count=len(top))
            return top
