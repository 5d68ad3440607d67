"""In-memory notification repository for testing."""

from typing import Sequence

from forum.domain.model.notification import Notification
from forum.domain.repository.notification import NotificationRepository
from forum.domain.value import NotificationId, UserId


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self) -> None:
        self._notifications: dict[NotificationId, Notification] = {}

    async def find_by_user(self, user_id: UserId) -> list[Notification]:
        """Find a user's notifications, newest first."""
        notifications = [n for n in self._notifications.values() if n.user_id == user_id]
        return sorted(notifications, key=lambda n: n.created_at, reverse=True)

    async def save(self, notification: Notification) -> Notification:
        """Save or update a notification."""
        self._notifications[notification.id] = notification
        return notification

    async def mark_read(
        self, user_id: UserId, notification_ids: Sequence[NotificationId]
    ) -> int:
        """Mark the given unread notifications of a user as read."""
        updated = 0
        for notification_id in set(notification_ids):
            notification = self._notifications.get(notification_id)
            if notification and notification.user_id == user_id and not notification.read:
                self._notifications[notification_id] = notification.model_copy(
                    update={"read": True}
                )
                updated += 1
        return updated

    async def delete_by_user(self, user_id: UserId) -> int:
        """Delete all notifications of a user."""
        doomed = [n.id for n in self._notifications.values() if n.user_id == user_id]
        for notification_id in doomed:
            del self._notifications[notification_id]
        return len(doomed)
