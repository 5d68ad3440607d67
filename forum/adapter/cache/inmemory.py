"""In-memory cache for tests and local runs."""

import json
import time
from datetime import timedelta
from typing import Any, Callable

from forum.domain.cache import Cache


class InMemoryCache(Cache):
    """Dict-backed cache with expiry.

    Values go through a JSON round trip on write so reads see what
    Redis would return (tuples come back as lists, and so on).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize in-memory cache.

        Args:
            clock: Seconds source used for expiry
        """
        self._clock = clock
        self._entries: dict[str, tuple[str, float | None]] = {}

    async def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        raw, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._entries[key]
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        expires_at = self._clock() + ttl.total_seconds() if ttl else None
        self._entries[key] = (json.dumps(value), expires_at)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def ttl_of(self, key: str) -> float | None:
        """Seconds left before ``key`` expires (None if it never does)."""
        entry = self._entries.get(key)
        if entry is None or entry[1] is None:
            return None
        return entry[1] - self._clock()
