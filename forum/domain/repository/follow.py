"""Follow relation repository interface."""

from abc import ABC, abstractmethod

from forum.domain.value import NodeId, UserId


class FollowRepository(ABC):
    """Stores user->user and user->node follow edges.

    A user->user edge (A, B) is read in both directions: B is in A's
    following list and A is in B's followers list.
    """

    @abstractmethod
    async def add_user_follow(self, follower_id: UserId, followee_id: UserId) -> None:
        """Record that ``follower_id`` follows ``followee_id`` (idempotent)."""
        pass

    @abstractmethod
    async def remove_user_follow(
        self, follower_id: UserId, followee_id: UserId
    ) -> bool:
        """Remove a follow edge.

        Returns:
            True if an edge was removed, False if none existed
        """
        pass

    @abstractmethod
    async def find_following_ids(self, user_id: UserId) -> list[UserId]:
        """IDs of users that ``user_id`` follows, oldest first."""
        pass

    @abstractmethod
    async def find_follower_ids(self, user_id: UserId) -> list[UserId]:
        """IDs of users following ``user_id``, oldest first."""
        pass

    @abstractmethod
    async def add_node_follow(self, user_id: UserId, node_id: NodeId) -> None:
        """Record that ``user_id`` follows a node (idempotent)."""
        pass

    @abstractmethod
    async def remove_node_follow(self, user_id: UserId, node_id: NodeId) -> bool:
        """Remove a node follow edge.

        Returns:
            True if an edge was removed, False if none existed
        """
        pass

    @abstractmethod
    async def find_following_node_ids(self, user_id: UserId) -> list[NodeId]:
        """IDs of nodes ``user_id`` follows, oldest first."""
        pass

    @abstractmethod
    async def find_node_follower_ids(self, node_id: NodeId) -> list[UserId]:
        """IDs of users following a node, oldest first."""
        pass
