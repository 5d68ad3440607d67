"""Location popularity aggregation."""

from collections import defaultdict
from typing import Iterable

import logfire

from forum.domain.model import LocationStat
from forum.domain.repository import LocationStatsRepository, UserRepository

from .base import Service


def _emit(login: str, location: str | None) -> tuple[str, LocationStat] | None:
    """Map step: one partial value per user with a location."""
    if location is None or not location.strip():
        return None
    return location, LocationStat(location=location, count=1, sample_logins=[login])


def _reduce(location: str, values: list[LocationStat]) -> LocationStat:
    """Reduce step: sum the counts, keep the last login of each value.

    Re-reducing already reduced values therefore drops all but one login
    per value; ``sample_logins`` is an approximation by design.
    """
    return LocationStat(
        location=location,
        count=sum(v.count for v in values),
        sample_logins=[v.sample_logins[-1] for v in values if v.sample_logins],
    )


class LocationService(Service):
    """Builds and reads the "hot locations" list.

    ``compute_location_popularity`` does a group-and-reduce pass over a
    snapshot of all users and replaces the materialized result;
    ``top_locations`` only reads that result. How often the computation
    runs is up to the caller (see ``scripts/refresh_locations.py``).
    """

    def __init__(
        self,
        user_repository: UserRepository,
        location_stats_repository: LocationStatsRepository,
        reduce_batch_size: int = 100,
        top_limit: int = 13,
    ) -> None:
        """Initialize location service.

        Args:
            user_repository: User repository (source snapshot)
            location_stats_repository: Materialized result store
            reduce_batch_size: Partial values combined per reduce step
            top_limit: Default number of entries for ``top_locations``
        """
        if reduce_batch_size < 2:
            raise ValueError("reduce_batch_size must be at least 2")
        self.user_repository = user_repository
        self.location_stats_repository = location_stats_repository
        self.reduce_batch_size = reduce_batch_size
        self.top_limit = top_limit

    async def compute_location_popularity(self) -> list[LocationStat]:
        """Recompute per-location counts and store them.

        Returns:
            The stored entries, in no particular order
        """
        with logfire.span("location_service.compute_location_popularity"):
            snapshot = await self.user_repository.find_all_locations()
            logfire.info("Fetched users for location aggregation", count=len(snapshot))

            stats = self.aggregate(snapshot)
            await self.location_stats_repository.replace_all(stats)

            logfire.info("Location popularity stored", locations=len(stats))
            return stats

    def aggregate(
        self, snapshot: Iterable[tuple[str, str | None]]
    ) -> list[LocationStat]:
        """Group (login, location) pairs by location and reduce each group.

        Keys with a single emitted value are stored as emitted. Larger
        groups are reduced in batches of ``reduce_batch_size`` until one
        value remains.
        """
        groups: dict[str, list[LocationStat]] = defaultdict(list)
        for login, location in snapshot:
            emitted = _emit(login, location)
            if emitted:
                key, value = emitted
                groups[key].append(value)

        results = []
        for location, values in groups.items():
            while len(values) > 1:
                values = [
                    _reduce(location, values[i : i + self.reduce_batch_size])
                    for i in range(0, len(values), self.reduce_batch_size)
                ]
            results.append(values[0])
        return results

    async def top_locations(self, limit: int | None = None) -> list[LocationStat]:
        """Most popular locations, by user count descending.

        Entries with a blank location are skipped. Order among equal
        counts is unspecified.

        Args:
            limit: Maximum entries (defaults to the configured top limit)
        """
        limit = self.top_limit if limit is None else limit
        with logfire.span("location_service.top_locations", limit=limit):
            stats = await self.location_stats_repository.find_all()
            ranked = sorted(
                (s for s in stats if s.location and s.location.strip()),
                key=lambda s: s.count,
                reverse=True,
            )
            return ranked[:limit]
