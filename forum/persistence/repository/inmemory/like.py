"""In-memory like repository for testing."""

from typing import Optional
from uuid import UUID

from forum.domain.model.like import Like
from forum.domain.repository.like import LikeRepository
from forum.domain.value import LikeableType, UserId


class InMemoryLikeRepository(LikeRepository):
    """In-memory implementation of LikeRepository for testing."""

    def __init__(self) -> None:
        self._likes: list[Like] = []

    async def find_by_user_and_likeable(
        self, user_id: UserId, likeable_type: LikeableType, likeable_id: UUID
    ) -> Optional[Like]:
        """Find a like by user and likeable item."""
        for like in self._likes:
            if (
                like.user_id == user_id
                and like.likeable_type == likeable_type
                and like.likeable_id == likeable_id
            ):
                return like
        return None

    async def find_by_user(self, user_id: UserId) -> list[Like]:
        """Find all likes by a user, newest first."""
        likes = [like for like in self._likes if like.user_id == user_id]
        return sorted(likes, key=lambda like: like.created_at, reverse=True)

    async def save(self, like: Like) -> Like:
        """Store a like."""
        self._likes.append(like)
        return like

    async def delete_by_user_and_likeable(
        self, user_id: UserId, likeable_type: LikeableType, likeable_id: UUID
    ) -> int:
        """Delete every like by a user on an item."""
        kept = [
            like
            for like in self._likes
            if not (
                like.user_id == user_id
                and like.likeable_type == likeable_type
                and like.likeable_id == likeable_id
            )
        ]
        removed = len(self._likes) - len(kept)
        self._likes = kept
        return removed
