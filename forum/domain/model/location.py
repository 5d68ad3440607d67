"""Location popularity entry."""

from pydantic import Field

from forum.domain.model.common import DomainModel


class LocationStat(DomainModel):
    """How many users list a location, plus a few of their logins.

    ``sample_logins`` is a hint for the UI, not a complete list.
    """

    location: str
    count: int = Field(ge=0)
    sample_logins: list[str] = Field(default_factory=list)
