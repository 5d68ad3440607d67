"""In-memory follow repository for testing."""

from forum.domain.repository.follow import FollowRepository
from forum.domain.value import NodeId, UserId


class InMemoryFollowRepository(FollowRepository):
    """In-memory implementation of FollowRepository for testing."""

    def __init__(self) -> None:
        self._user_follows: list[tuple[UserId, UserId]] = []
        self._node_follows: list[tuple[UserId, NodeId]] = []

    async def add_user_follow(self, follower_id: UserId, followee_id: UserId) -> None:
        """Add a follow edge if missing."""
        edge = (follower_id, followee_id)
        if edge not in self._user_follows:
            self._user_follows.append(edge)

    async def remove_user_follow(
        self, follower_id: UserId, followee_id: UserId
    ) -> bool:
        """Remove a follow edge."""
        edge = (follower_id, followee_id)
        if edge in self._user_follows:
            self._user_follows.remove(edge)
            return True
        return False

    async def find_following_ids(self, user_id: UserId) -> list[UserId]:
        """IDs of users ``user_id`` follows."""
        return [followee for follower, followee in self._user_follows if follower == user_id]

    async def find_follower_ids(self, user_id: UserId) -> list[UserId]:
        """IDs of users following ``user_id``."""
        return [follower for follower, followee in self._user_follows if followee == user_id]

    async def add_node_follow(self, user_id: UserId, node_id: NodeId) -> None:
        """Add a node follow edge if missing."""
        edge = (user_id, node_id)
        if edge not in self._node_follows:
            self._node_follows.append(edge)

    async def remove_node_follow(self, user_id: UserId, node_id: NodeId) -> bool:
        """Remove a node follow edge."""
        edge = (user_id, node_id)
        if edge in self._node_follows:
            self._node_follows.remove(edge)
            return True
        return False

    async def find_following_node_ids(self, user_id: UserId) -> list[NodeId]:
        """IDs of nodes ``user_id`` follows."""
        return [node for user, node in self._node_follows if user == user_id]

    async def find_node_follower_ids(self, node_id: NodeId) -> list[UserId]:
        """IDs of users following a node."""
        return [user for user, node in self._node_follows if node == node_id]
