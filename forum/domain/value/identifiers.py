"""Strongly typed identifiers for forum domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
UserId = NewType("UserId", UUID)
NodeId = NewType("NodeId", UUID)
TopicId = NewType("TopicId", UUID)
ReplyId = NewType("ReplyId", UUID)
LikeId = NewType("LikeId", UUID)
NotificationId = NewType("NotificationId", UUID)
