"""GitHub REST client for public repository listings."""

from typing import Any

import httpx
import logfire

from forum.adapter.error import ProviderError
from forum.domain.service.github_service import RepositoryListingClient
from forum.domain.value import GitHubRepository


class GitHubAPIError(ProviderError):
    """GitHub API error (network, auth, rate limit, bad payload)."""

    pass


class GitHubClient(RepositoryListingClient):
    """Base class for GitHub clients.

    Provides type distinction for dependency injection.
    """

    pass


def _to_repository(item: dict[str, Any]) -> GitHubRepository:
    return GitHubRepository(
        name=item["name"],
        html_url=item["html_url"],
        description=item.get("description"),
        language=item.get("language"),
        watchers=item.get("watchers_count", item.get("watchers", 0)) or 0,
        fork=item.get("fork", False),
    )


class RealGitHubClient(GitHubClient):
    """Fetches ``GET /users/{handle}/repos`` from the GitHub REST API."""

    def __init__(
        self,
        api_url: str = "https://api.github.com",
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize GitHub client.

        Args:
            api_url: Base URL of the REST API
            token: Optional token, raises the rate limit
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.api_url = api_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def list_repositories(self, handle: str) -> list[GitHubRepository]:
        """Fetch the public repositories of ``handle``.

        Args:
            handle: GitHub username

        Returns:
            Repositories in API order

        Raises:
            GitHubAPIError: If the request fails or returns a non-list body
        """
        url = f"{self.api_url}/users/{handle}/repos"

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.get(
                    url,
                    params={"per_page": 100, "type": "owner"},
                    headers=self._headers(),
                    timeout=self.timeout,
                )

                if response.status_code != 200:
                    logfire.error(
                        "GitHub repository request failed",
                        handle=handle,
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise GitHubAPIError(
                        f"Repository request failed: {response.status_code}"
                    )

                payload = response.json()

        except httpx.HTTPError as e:
            logfire.error("GitHub repository HTTP error", handle=handle, error=str(e))
            raise GitHubAPIError(f"HTTP error fetching repositories: {e}") from e

        if not isinstance(payload, list):
            raise GitHubAPIError("Unexpected repository payload")

        try:
            return [_to_repository(item) for item in payload]
        except (KeyError, TypeError, ValueError) as e:
            raise GitHubAPIError(f"Malformed repository entry: {e}") from e


class MockGitHubClient(GitHubClient):
    """Mock GitHub client for testing.

    Serves preset listings per handle and records every call. Handles
    listed in ``failing`` raise ``GitHubAPIError``.
    """

    def __init__(
        self,
        repositories: dict[str, list[GitHubRepository]] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.repositories = repositories or {}
        self.failing = failing or set()
        self.calls: list[str] = []

    async def list_repositories(self, handle: str) -> list[GitHubRepository]:
        """Return the preset listing for ``handle``.

        Raises:
            GitHubAPIError: If ``handle`` is marked as failing
        """
        self.calls.append(handle)
        if handle in self.failing:
            raise GitHubAPIError(f"Mock failure for {handle}")
        return list(self.repositories.get(handle, []))
