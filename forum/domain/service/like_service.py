"""Like domain service."""

from datetime import datetime
from typing import Callable
from uuid import uuid4

import logfire

from forum.domain.model import Like
from forum.domain.repository import LikeRepository
from forum.domain.value import LikeableRef, LikeId, UserId

from .base import Service


class LikeService(Service):
    """Domain service for liking and unliking content."""

    def __init__(
        self,
        like_repository: LikeRepository,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize like service.

        Args:
            like_repository: Like repository
            clock: Source of the current time
        """
        self.like_repository = like_repository
        self.clock = clock

    async def like(self, user_id: UserId, target: LikeableRef) -> Like:
        """Like ``target``; returns the existing like if there is one."""
        with logfire.span(
            "like_service.like",
            user_id=str(user_id),
            likeable_type=target.type.value,
            likeable_id=str(target.id),
        ):
            existing = await self.like_repository.find_by_user_and_likeable(
                user_id, target.type, target.id
            )
            if existing:
                logfire.info("Already liked", like_id=str(existing.id))
                return existing

            like = Like(
                id=LikeId(uuid4()),
                user_id=user_id,
                likeable_type=target.type,
                likeable_id=target.id,
                created_at=self.clock(),
            )
            saved = await self.like_repository.save(like)
            logfire.info("Liked", like_id=str(saved.id))
            return saved

    async def unlike(self, user_id: UserId, target: LikeableRef) -> int:
        """Remove every like by ``user_id`` on ``target``.

        Returns:
            Number of likes removed
        """
        with logfire.span(
            "like_service.unlike",
            user_id=str(user_id),
            likeable_type=target.type.value,
            likeable_id=str(target.id),
        ):
            removed = await self.like_repository.delete_by_user_and_likeable(
                user_id, target.type, target.id
            )
            logfire.info("Unliked", removed=removed)
            return removed

    async def is_liked(self, user_id: UserId, target: LikeableRef) -> bool:
        like = await self.like_repository.find_by_user_and_likeable(
            user_id, target.type, target.id
        )
        return like is not None

    async def likes_of(self, user_id: UserId) -> list[Like]:
        """All likes by a user, newest first."""
        return await self.like_repository.find_by_user(user_id)
