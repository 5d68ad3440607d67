"""Unit tests for RealGitHubClient using httpx.MockTransport."""

import httpx
import pytest

from forum.adapter.github import GitHubAPIError, RealGitHubClient


def _client(handler, token: str | None = None) -> RealGitHubClient:
    return RealGitHubClient(
        api_url="https://api.github.test/",
        token=token,
        transport=httpx.MockTransport(handler),
    )


class TestRealGitHubClient:
    """Tests for listing repositories over HTTP."""

    @pytest.mark.asyncio
    async def test_lists_repositories(self):
        """Should request the user's owned repos and map the payload."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json=[
                    {
                        "name": "hello",
                        "html_url": "https://github.com/octocat/hello",
                        "description": None,
                        "language": "Python",
                        "watchers_count": 12,
                        "fork": False,
                    },
                    {
                        "name": "legacy",
                        "html_url": "https://github.com/octocat/legacy",
                        "watchers": 3,
                    },
                ],
            )

        repositories = await _client(handler, token="t0k3n").list_repositories(
            "octocat"
        )

        assert [(r.name, r.watchers) for r in repositories] == [
            ("hello", 12),
            ("legacy", 3),
        ]
        [request] = seen
        assert request.url.path == "/users/octocat/repos"
        assert request.url.params["type"] == "owner"
        assert request.headers["Authorization"] == "Bearer t0k3n"

    @pytest.mark.asyncio
    async def test_anonymous_request_has_no_auth_header(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        assert await _client(handler).list_repositories("octocat") == []
        assert "Authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_rate_limited(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"message": "API rate limit exceeded"})

        with pytest.raises(GitHubAPIError):
            await _client(handler).list_repositories("octocat")

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GitHubAPIError):
            await _client(handler).list_repositories("octocat")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{"message": "Not Found"}, [{"name": "x"}]])
    async def test_unexpected_payload(self, payload):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=payload)

        with pytest.raises(GitHubAPIError):
            await _client(handler).list_repositories("octocat")
