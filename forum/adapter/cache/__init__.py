"""Cache adapters."""

from .inmemory import InMemoryCache
from .redis import RedisCache

__all__ = ["InMemoryCache", "RedisCache"]
