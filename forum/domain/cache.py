"""Cache port.

Key -> value store with optional expiry. Values must be JSON-serializable
(ints, strings, lists and dicts of those). A missing or expired key reads
as None.
"""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any


class Cache(ABC):
    """Key-value cache used for read markers and memoized API results."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the cached value for ``key``, or None on a miss."""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        """Store ``value`` under ``key``; without ``ttl`` it never expires."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        pass
