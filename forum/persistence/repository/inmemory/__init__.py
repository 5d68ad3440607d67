"""In-memory repository implementations for testing."""

from .follow import InMemoryFollowRepository
from .like import InMemoryLikeRepository
from .location import InMemoryLocationStatsRepository
from .notification import InMemoryNotificationRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryFollowRepository",
    "InMemoryLikeRepository",
    "InMemoryLocationStatsRepository",
    "InMemoryNotificationRepository",
    "InMemoryUserRepository",
]
