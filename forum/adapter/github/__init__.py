"""GitHub adapter."""

from .client import GitHubAPIError, GitHubClient, MockGitHubClient, RealGitHubClient

__all__ = ["GitHubAPIError", "GitHubClient", "MockGitHubClient", "RealGitHubClient"]
