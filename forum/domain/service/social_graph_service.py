"""Follow relations between users, and from users to nodes."""

import logfire

from forum.domain.error import NotFoundError
from forum.domain.model import User
from forum.domain.repository import FollowRepository, UserRepository
from forum.domain.value import NodeId, UserId

from .base import Service


class SocialGraphService(Service):
    """Domain service for the follow graph.

    One stored edge serves both directions: after ``follow(a, b)``,
    ``b`` is in ``following(a)`` and ``a`` is in ``followers(b)``.
    Following yourself is not prevented.
    """

    def __init__(
        self, follow_repository: FollowRepository, user_repository: UserRepository
    ) -> None:
        """Initialize social graph service.

        Args:
            follow_repository: Follow edge repository
            user_repository: User repository
        """
        self.follow_repository = follow_repository
        self.user_repository = user_repository

    async def follow(self, follower_id: UserId, followee_id: UserId) -> None:
        """Make ``follower_id`` follow ``followee_id``.

        Raises:
            NotFoundError: If either user does not exist
        """
        with logfire.span(
            "social_graph_service.follow",
            follower_id=str(follower_id),
            followee_id=str(followee_id),
        ):
            for user_id in (follower_id, followee_id):
                if not await self.user_repository.find_by_id(user_id):
                    logfire.warn("Follow involving unknown user", user_id=str(user_id))
                    raise NotFoundError("User", str(user_id))

            await self.follow_repository.add_user_follow(follower_id, followee_id)
            logfire.info("User followed")

    async def unfollow(self, follower_id: UserId, followee_id: UserId) -> bool:
        """Remove a follow edge.

        Returns:
            True if the edge existed
        """
        with logfire.span(
            "social_graph_service.unfollow",
            follower_id=str(follower_id),
            followee_id=str(followee_id),
        ):
            return await self.follow_repository.remove_user_follow(
                follower_id, followee_id
            )

    async def is_following(self, follower_id: UserId, followee_id: UserId) -> bool:
        return followee_id in await self.follow_repository.find_following_ids(
            follower_id
        )

    async def following(self, user_id: UserId) -> list[User]:
        """Users ``user_id`` follows."""
        ids = await self.follow_repository.find_following_ids(user_id)
        return await self._load(ids)

    async def followers(self, user_id: UserId) -> list[User]:
        """Users following ``user_id``."""
        ids = await self.follow_repository.find_follower_ids(user_id)
        return await self._load(ids)

    async def follow_node(self, user_id: UserId, node_id: NodeId) -> None:
        with logfire.span(
            "social_graph_service.follow_node",
            user_id=str(user_id),
            node_id=str(node_id),
        ):
            await self.follow_repository.add_node_follow(user_id, node_id)

    async def unfollow_node(self, user_id: UserId, node_id: NodeId) -> bool:
        with logfire.span(
            "social_graph_service.unfollow_node",
            user_id=str(user_id),
            node_id=str(node_id),
        ):
            return await self.follow_repository.remove_node_follow(user_id, node_id)

    async def following_nodes(self, user_id: UserId) -> list[NodeId]:
        return await self.follow_repository.find_following_node_ids(user_id)

    async def node_followers(self, node_id: NodeId) -> list[UserId]:
        return await self.follow_repository.find_node_follower_ids(node_id)

    async def _load(self, ids: list[UserId]) -> list[User]:
        users = []
        for user_id in ids:
            user = await self.user_repository.find_by_id(user_id)
            if user:
                users.append(user)
        return users
