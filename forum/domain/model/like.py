"""Like entity.

A user's bookmark/like on a topic, reply, post or photo.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import LikeableType, LikeId, UserId


class Like(DomainModel):
    """Like entity.

    Polymorphic reference to the liked item via (likeable_type, likeable_id).
    One like per user per item is the intended rule; the store does not
    enforce it, so removal deletes every match.
    """

    id: LikeId
    user_id: UserId
    likeable_type: LikeableType
    likeable_id: UUID
    created_at: datetime = Field(default_factory=datetime.now)
