"""List hot locations use case."""

from pydantic import BaseModel, Field

from forum.application.usecase.base import BaseUseCase
from forum.domain.model import LocationStat
from forum.domain.service import LocationService


class ListHotLocationsRequest(BaseModel):
    """List hot locations request."""

    limit: int | None = Field(default=None, ge=1)


class ListHotLocationsResponse(BaseModel):
    """List hot locations response."""

    locations: list[LocationStat]


class ListHotLocationsUseCase(BaseUseCase):
    """Use case for the "hot locations" sidebar."""

    def __init__(self, location_service: LocationService) -> None:
        self.location_service = location_service

    async def execute(self, request: ListHotLocationsRequest) -> ListHotLocationsResponse:
        """Read the most popular locations from the stored result."""
        locations = await self.location_service.top_locations(request.limit)
        return ListHotLocationsResponse(locations=locations)
