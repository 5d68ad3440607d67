"""Materialized location statistics repository interface."""

from abc import ABC, abstractmethod
from typing import Sequence

from forum.domain.model.location import LocationStat


class LocationStatsRepository(ABC):
    """Read-optimized store for the location aggregation result."""

    @abstractmethod
    async def replace_all(self, stats: Sequence[LocationStat]) -> None:
        """Replace the stored result with ``stats``."""
        pass

    @abstractmethod
    async def find_all(self) -> list[LocationStat]:
        """Return every stored entry, in no particular order."""
        pass
