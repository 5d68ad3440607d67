"""PostgreSQL implementation of the location stats repository."""

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import LocationStat
from forum.domain.repository import LocationStatsRepository
from forum.persistence.mappers import row_to_location_stat
from forum.persistence.tables import user_locations_table


class PostgresLocationStatsRepository(LocationStatsRepository):
    """Stores the aggregation result in ``user_locations``."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def replace_all(self, stats: Sequence[LocationStat]) -> None:
        """Swap the table contents within the current transaction."""
        await self.session.execute(delete(user_locations_table))
        if stats:
            await self.session.execute(
                user_locations_table.insert(),
                [stat.model_dump() for stat in stats],
            )
        await self.session.flush()

    async def find_all(self) -> list[LocationStat]:
        """Return every stored entry."""
        result = await self.session.execute(select(user_locations_table))
        return [row_to_location_stat(dict(row)) for row in result.mappings().all()]
