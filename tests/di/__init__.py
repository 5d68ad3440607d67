"""Mock providers for testing."""

from .cache import MockCacheProvider
from .github import MockGitHubProvider
from .mail import MockMailProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockCacheProvider",
    "MockGitHubProvider",
    "MockMailProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
