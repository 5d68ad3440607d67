"""Repository interfaces for the forum domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from forum.domain.repository.follow import FollowRepository
from forum.domain.repository.like import LikeRepository
from forum.domain.repository.location import LocationStatsRepository
from forum.domain.repository.notification import NotificationRepository
from forum.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "FollowRepository",
    "LikeRepository",
    "NotificationRepository",
    "LocationStatsRepository",
]
