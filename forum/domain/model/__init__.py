"""Domain model entities for the forum."""

from forum.domain.model.authorization import Authorization
from forum.domain.model.like import Like
from forum.domain.model.location import LocationStat
from forum.domain.model.notification import Notification
from forum.domain.model.topic import Node, Topic
from forum.domain.model.user import User

__all__ = [
    "User",
    "Authorization",
    "Like",
    "Notification",
    "Node",
    "Topic",
    "LocationStat",
]
