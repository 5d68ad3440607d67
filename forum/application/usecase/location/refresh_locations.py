"""Refresh locations use case."""

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import LocationService


class RefreshLocationsResponse(BaseModel):
    """Refresh locations response."""

    locations: int
    users: int


class RefreshLocationsUseCase(BaseUseCase):
    """Use case for recomputing the location popularity table."""

    def __init__(self, location_service: LocationService) -> None:
        self.location_service = location_service

    async def execute(self, request: None = None) -> RefreshLocationsResponse:
        """Run one aggregation pass and replace the stored result."""
        stats = await self.location_service.compute_location_popularity()
        return RefreshLocationsResponse(
            locations=len(stats), users=sum(stat.count for stat in stats)
        )
