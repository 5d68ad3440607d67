"""Topic and node references.

Topics and nodes are owned by the content module; the user aggregate only
needs the fields read-state tracking and node follows depend on.
"""

from typing import Optional

from forum.domain.model.common import DomainModel
from forum.domain.value import NodeId, ReplyId, TopicId, UserId


class Node(DomainModel):
    """Topic category users can follow."""

    id: NodeId
    name: str


class Topic(DomainModel):
    """Discussion topic as seen by read-state tracking."""

    id: TopicId
    user_id: UserId
    node_id: NodeId
    title: str
    last_reply_id: Optional[ReplyId] = None  # None until the first reply
