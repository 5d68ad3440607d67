"""PostgreSQL implementation of Follow repository."""

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.repository import FollowRepository
from forum.domain.value import NodeId, UserId
from forum.persistence.tables import node_follows_table, user_follows_table


class PostgresFollowRepository(FollowRepository):
    """PostgreSQL implementation of FollowRepository.

    One ``user_follows`` row per edge, queried by either column.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def add_user_follow(self, follower_id: UserId, followee_id: UserId) -> None:
        """Insert a follow edge, ignoring an existing one."""
        stmt = (
            insert(user_follows_table)
            .values(follower_id=follower_id, followee_id=followee_id)
            .on_conflict_do_nothing(index_elements=["follower_id", "followee_id"])
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def remove_user_follow(
        self, follower_id: UserId, followee_id: UserId
    ) -> bool:
        """Delete a follow edge."""
        stmt = delete(user_follows_table).where(
            user_follows_table.c.follower_id == follower_id,
            user_follows_table.c.followee_id == followee_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def find_following_ids(self, user_id: UserId) -> list[UserId]:
        """IDs of users ``user_id`` follows."""
        stmt = (
            select(user_follows_table.c.followee_id)
            .where(user_follows_table.c.follower_id == user_id)
            .order_by(user_follows_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [UserId(row.followee_id) for row in result.all()]

    async def find_follower_ids(self, user_id: UserId) -> list[UserId]:
        """IDs of users following ``user_id``."""
        stmt = (
            select(user_follows_table.c.follower_id)
            .where(user_follows_table.c.followee_id == user_id)
            .order_by(user_follows_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [UserId(row.follower_id) for row in result.all()]

    async def add_node_follow(self, user_id: UserId, node_id: NodeId) -> None:
        """Insert a node follow edge, ignoring an existing one."""
        stmt = (
            insert(node_follows_table)
            .values(user_id=user_id, node_id=node_id)
            .on_conflict_do_nothing(index_elements=["user_id", "node_id"])
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def remove_node_follow(self, user_id: UserId, node_id: NodeId) -> bool:
        """Delete a node follow edge."""
        stmt = delete(node_follows_table).where(
            node_follows_table.c.user_id == user_id,
            node_follows_table.c.node_id == node_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def find_following_node_ids(self, user_id: UserId) -> list[NodeId]:
        """IDs of nodes ``user_id`` follows."""
        stmt = (
            select(node_follows_table.c.node_id)
            .where(node_follows_table.c.user_id == user_id)
            .order_by(node_follows_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [NodeId(row.node_id) for row in result.all()]

    async def find_node_follower_ids(self, node_id: NodeId) -> list[UserId]:
        """IDs of users following a node."""
        stmt = (
            select(node_follows_table.c.user_id)
            .where(node_follows_table.c.node_id == node_id)
            .order_by(node_follows_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [UserId(row.user_id) for row in result.all()]
