"""Per-user topic read markers."""

from datetime import timedelta

import logfire

from forum.domain.cache import Cache
from forum.domain.model import Topic
from forum.domain.value import UserId

from .base import Service

# Stored for topics without replies
NO_REPLY_MARKER = -1


class ReadStateService(Service):
    """Tracks whether a user has seen a topic's latest reply.

    The marker is the topic's last reply id at the time of reading, so a
    new reply makes the topic unread without touching the cache, and an
    evicted marker simply reads as unread.
    """

    def __init__(self, cache: Cache, ttl: timedelta | None = None) -> None:
        """Initialize read state service.

        Args:
            cache: Cache holding the markers
            ttl: Optional marker lifetime
        """
        self.cache = cache
        self.ttl = ttl

    @staticmethod
    def cache_key(user_id: UserId, topic: Topic) -> str:
        return f"user:{user_id}:topic_read:{topic.id}"

    @staticmethod
    def marker(topic: Topic) -> str | int:
        if topic.last_reply_id is None:
            return NO_REPLY_MARKER
        return str(topic.last_reply_id)

    async def is_topic_read(self, user_id: UserId, topic: Topic) -> bool:
        """Whether ``user_id`` has read ``topic`` up to its latest reply."""
        cached = await self.cache.get(self.cache_key(user_id, topic))
        return cached == self.marker(topic)

    async def mark_topic_read(self, user_id: UserId, topic: Topic) -> None:
        """Mark ``topic`` read up to its latest reply."""
        await self.cache.set(self.cache_key(user_id, topic), self.marker(topic), self.ttl)
        logfire.debug("Topic marked read", user_id=str(user_id), topic_id=str(topic.id))
