"""Location use cases."""

from .list_hot_locations import ListHotLocationsUseCase
from .refresh_locations import RefreshLocationsUseCase

__all__ = ["ListHotLocationsUseCase", "RefreshLocationsUseCase"]
