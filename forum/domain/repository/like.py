"""Like repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from forum.domain.model.like import Like
from forum.domain.value import LikeableType, UserId


class LikeRepository(ABC):
    """Repository for Like entity."""

    @abstractmethod
    async def find_by_user_and_likeable(
        self, user_id: UserId, likeable_type: LikeableType, likeable_id: UUID
    ) -> Optional[Like]:
        """Find a user's like on a specific item.

        Returns:
            The first matching like, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> list[Like]:
        """Find all likes by a user, newest first."""
        pass

    @abstractmethod
    async def save(self, like: Like) -> Like:
        """Insert a like.

        Does not check for an existing like on the same item.
        """
        pass

    @abstractmethod
    async def delete_by_user_and_likeable(
        self, user_id: UserId, likeable_type: LikeableType, likeable_id: UUID
    ) -> int:
        """Delete every like by a user on an item.

        Returns:
            Number of likes deleted
        """
        pass
