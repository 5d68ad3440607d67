"""PostgreSQL repository implementations."""

from forum.persistence.repository.follow import PostgresFollowRepository
from forum.persistence.repository.like import PostgresLikeRepository
from forum.persistence.repository.location import PostgresLocationStatsRepository
from forum.persistence.repository.notification import PostgresNotificationRepository
from forum.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresFollowRepository",
    "PostgresLikeRepository",
    "PostgresNotificationRepository",
    "PostgresLocationStatsRepository",
]
