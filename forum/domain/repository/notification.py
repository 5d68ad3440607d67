"""Notification repository interface."""

from abc import ABC, abstractmethod
from typing import Sequence

from forum.domain.model.notification import Notification
from forum.domain.value import NotificationId, UserId


class NotificationRepository(ABC):
    """Repository for Notification entity."""

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> list[Notification]:
        """Find a user's notifications, newest first."""
        pass

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        """Save a notification (create or update)."""
        pass

    @abstractmethod
    async def mark_read(
        self, user_id: UserId, notification_ids: Sequence[NotificationId]
    ) -> int:
        """Mark unread notifications of ``user_id`` among ``notification_ids`` read.

        Notifications owned by other users are left untouched.

        Returns:
            Number of notifications updated
        """
        pass

    @abstractmethod
    async def delete_by_user(self, user_id: UserId) -> int:
        """Bulk-delete all notifications of a user.

        Returns:
            Number of notifications deleted
        """
        pass
