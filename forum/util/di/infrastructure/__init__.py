"""Infrastructure providers."""

# Import bases
from .cache import CacheProvider
from .github import GitHubProvider
from .mail import MailProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .cache import ProdCacheProvider  # noqa: F401
from .github import ProdGitHubProvider  # noqa: F401
from .mail import ProdMailProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "CacheProvider",
    "GitHubProvider",
    "MailProvider",
    "PersistenceProvider",
    "ProdCacheProvider",
    "ProdGitHubProvider",
    "ProdMailProvider",
    "ProdPersistenceProvider",
]
