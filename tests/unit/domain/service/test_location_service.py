"""Unit tests for LocationService."""

import pytest

from forum.domain.model import LocationStat
from forum.domain.repository import LocationStatsRepository, UserRepository
from forum.domain.service import LocationService
from forum.persistence.repository.inmemory import (
    InMemoryLocationStatsRepository,
    InMemoryUserRepository,
)
from tests.factories import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


def _service(reduce_batch_size: int = 100) -> LocationService:
    return LocationService(
        InMemoryUserRepository(),
        InMemoryLocationStatsRepository(),
        reduce_batch_size=reduce_batch_size,
    )


class TestAggregate:
    """Tests for the group-and-reduce step."""

    def test_counts_users_per_location(self):
        service = _service()

        stats = service.aggregate(
            [("alice", "Berlin"), ("bob", "Berlin"), ("carol", "Shanghai")]
        )

        by_location = {s.location: s.count for s in stats}
        assert by_location == {"Berlin": 2, "Shanghai": 1}

    def test_blank_locations_excluded(self):
        """Should skip users with no or whitespace-only location."""
        service = _service()

        stats = service.aggregate([("alice", None), ("bob", ""), ("carol", "   ")])

        assert stats == []

    def test_single_user_location_kept_as_emitted(self):
        service = _service()

        [stat] = service.aggregate([("alice", "Berlin")])

        assert stat == LocationStat(location="Berlin", count=1, sample_logins=["alice"])

    def test_locations_are_case_sensitive(self):
        service = _service()

        stats = service.aggregate([("alice", "Berlin"), ("bob", "berlin")])

        assert len(stats) == 2

    def test_batched_reduce_keeps_count_exact(self):
        """Should sum counts across reduce rounds."""
        service = _service(reduce_batch_size=2)
        snapshot = [(f"user{i}", "Berlin") for i in range(7)]

        [stat] = service.aggregate(snapshot)

        assert stat.count == 7

    def test_sample_logins_are_approximate(self):
        """Should keep fewer sample logins than users once re-reduced."""
        service = _service(reduce_batch_size=2)
        snapshot = [(f"user{i}", "Berlin") for i in range(8)]

        [stat] = service.aggregate(snapshot)

        assert 0 < len(stat.sample_logins) < 8
        assert set(stat.sample_logins) <= {login for login, _ in snapshot}

    def test_batch_size_must_allow_reduction(self):
        with pytest.raises(ValueError):
            _service(reduce_batch_size=1)


class TestComputeAndTop:
    """Tests for storing and reading the hot locations list."""

    @pytest.mark.asyncio
    async def test_compute_then_top(self, unit_env):
        """Should store the aggregation and rank it by count."""
        # Arrange
        service = await unit_env.get(LocationService)
        user_repo = await unit_env.get(UserRepository)
        for login, location in [
            ("alice", "Berlin"),
            ("bob", "Berlin"),
            ("carol", "Shanghai"),
            ("dave", "Berlin"),
            ("erin", "Shanghai"),
            ("frank", "Tokyo"),
            ("grace", None),
        ]:
            await user_repo.save(make_user(login, location=location))

        # Act
        await service.compute_location_popularity()
        top = await service.top_locations()

        # Assert
        assert [(s.location, s.count) for s in top] == [
            ("Berlin", 3),
            ("Shanghai", 2),
            ("Tokyo", 1),
        ]

    @pytest.mark.asyncio
    async def test_top_respects_limit(self, unit_env):
        service = await unit_env.get(LocationService)
        stats_repo = await unit_env.get(LocationStatsRepository)
        await stats_repo.replace_all(
            [LocationStat(location=f"City{i}", count=i) for i in range(1, 21)]
        )

        default_top = await service.top_locations()
        top_three = await service.top_locations(limit=3)

        assert len(default_top) == 13
        assert [s.count for s in top_three] == [20, 19, 18]

    @pytest.mark.asyncio
    async def test_top_skips_blank_entries(self, unit_env):
        service = await unit_env.get(LocationService)
        stats_repo = await unit_env.get(LocationStatsRepository)
        await stats_repo.replace_all(
            [
                LocationStat(location="  ", count=99),
                LocationStat(location="Berlin", count=1),
            ]
        )

        top = await service.top_locations()

        assert [s.location for s in top] == ["Berlin"]

    @pytest.mark.asyncio
    async def test_recompute_replaces_previous_result(self, unit_env):
        service = await unit_env.get(LocationService)
        user_repo = await unit_env.get(UserRepository)
        alice = await user_repo.save(make_user("alice", location="Berlin"))
        await service.compute_location_popularity()

        await user_repo.save(alice.model_copy(update={"location": "Tokyo"}))
        await service.compute_location_popularity()

        assert [s.location for s in await service.top_locations()] == ["Tokyo"]
