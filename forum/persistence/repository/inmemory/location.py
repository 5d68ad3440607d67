"""In-memory location stats repository for testing."""

from typing import Sequence

from forum.domain.model.location import LocationStat
from forum.domain.repository.location import LocationStatsRepository


class InMemoryLocationStatsRepository(LocationStatsRepository):
    """In-memory implementation of LocationStatsRepository for testing."""

    def __init__(self) -> None:
        self._stats: list[LocationStat] = []

    async def replace_all(self, stats: Sequence[LocationStat]) -> None:
        """Replace the stored result."""
        self._stats = list(stats)

    async def find_all(self) -> list[LocationStat]:
        """Return every stored entry."""
        return list(self._stats)
