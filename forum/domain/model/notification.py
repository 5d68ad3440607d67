"""Notification entity."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import NotifiableType, NotificationId, UserId


class Notification(DomainModel):
    """Something the user should look at (a reply, a mention, ...)."""

    id: NotificationId
    user_id: UserId
    notifiable_type: NotifiableType
    notifiable_id: UUID
    read: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
