"""PostgreSQL implementation of Notification repository."""

from typing import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Notification
from forum.domain.repository import NotificationRepository
from forum.domain.value import NotificationId, UserId
from forum.persistence.mappers import notification_to_dict, row_to_notification
from forum.persistence.tables import notifications_table


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user(self, user_id: UserId) -> list[Notification]:
        """Find a user's notifications, newest first."""
        stmt = (
            select(notifications_table)
            .where(notifications_table.c.user_id == user_id)
            .order_by(notifications_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_notification(dict(row)) for row in result.mappings().all()]

    async def save(self, notification: Notification) -> Notification:
        """Insert or update a notification."""
        data = notification_to_dict(notification)
        stmt = (
            insert(notifications_table)
            .values(**data)
            .on_conflict_do_update(index_elements=["id"], set_={"read": data["read"]})
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return notification

    async def mark_read(
        self, user_id: UserId, notification_ids: Sequence[NotificationId]
    ) -> int:
        """Mark the given unread notifications of a user as read."""
        if not notification_ids:
            return 0

        stmt = (
            update(notifications_table)
            .where(
                notifications_table.c.user_id == user_id,
                notifications_table.c.id.in_(list(notification_ids)),
                notifications_table.c.read.is_(False),
            )
            .values(read=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_by_user(self, user_id: UserId) -> int:
        """Delete all notifications of a user in one statement."""
        stmt = delete(notifications_table).where(
            notifications_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
