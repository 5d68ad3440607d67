"""Cache infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
from redis.asyncio import Redis

from forum.adapter.cache import RedisCache
from forum.config import Settings
from forum.domain.cache import Cache
from forum.util.di.base import ProviderBase
from forum.util.observability import instrument_redis


class CacheProvider(ProviderBase):
    """Cache component base."""

    __mock_component__ = "cache"


class ProdCacheProvider(CacheProvider):
    """Production cache provider using Redis."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_redis(self, settings: Settings) -> AsyncIterator[Redis]:
        """Provide a pooled Redis client, closed with the container."""
        instrument_redis()
        client = Redis.from_url(
            settings.cache.redis_url, encoding="utf-8", decode_responses=True
        )
        yield client
        await client.aclose()

    @provide(scope=Scope.APP)
    def get_cache(self, client: Redis, settings: Settings) -> Cache:
        """Provide the Redis-backed cache."""
        return RedisCache(client, key_prefix=settings.cache.key_prefix)
