"""Redis-backed cache."""

import json
from datetime import timedelta
from typing import Any

from redis.asyncio import Redis

from forum.domain.cache import Cache


class RedisCache(Cache):
    """Cache storing JSON-encoded values in Redis.

    Connection and command errors (``redis.exceptions.RedisError``) are
    not caught here; they reach the caller unchanged.
    """

    def __init__(self, client: Redis, key_prefix: str = "") -> None:
        """Initialize Redis cache.

        Args:
            client: Async Redis client (``decode_responses=True``)
            key_prefix: Prepended to every key
        """
        self.client = client
        self.key_prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    async def get(self, key: str) -> Any | None:
        raw = await self.client.get(self._key(key))
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        await self.client.set(self._key(key), json.dumps(value), ex=ttl)

    async def delete(self, key: str) -> None:
        await self.client.delete(self._key(key))
