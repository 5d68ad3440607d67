"""PostgreSQL implementation of Like repository."""

from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Like
from forum.domain.repository import LikeRepository
from forum.domain.value import LikeableType, UserId
from forum.persistence.mappers import like_to_dict, row_to_like
from forum.persistence.tables import likes_table


class PostgresLikeRepository(LikeRepository):
    """PostgreSQL implementation of LikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_likeable(
        self, user_id: UserId, likeable_type: LikeableType, likeable_id: UUID
    ) -> Optional[Like]:
        """Find the oldest like by a user on an item."""
        stmt = (
            select(likes_table)
            .where(
                likes_table.c.user_id == user_id,
                likes_table.c.likeable_type == likeable_type.value,
                likes_table.c.likeable_id == likeable_id,
            )
            .order_by(likes_table.c.created_at)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_like(dict(row)) if row else None

    async def find_by_user(self, user_id: UserId) -> list[Like]:
        """Find all likes by a user, newest first."""
        stmt = (
            select(likes_table)
            .where(likes_table.c.user_id == user_id)
            .order_by(likes_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_like(dict(row)) for row in result.mappings().all()]

    async def save(self, like: Like) -> Like:
        """Insert a like."""
        stmt = likes_table.insert().values(**like_to_dict(like))
        await self.session.execute(stmt)
        await self.session.flush()
        return like

    async def delete_by_user_and_likeable(
        self, user_id: UserId, likeable_type: LikeableType, likeable_id: UUID
    ) -> int:
        """Delete every like by a user on an item."""
        stmt = delete(likes_table).where(
            likes_table.c.user_id == user_id,
            likes_table.c.likeable_type == likeable_type.value,
            likes_table.c.likeable_id == likeable_id,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
