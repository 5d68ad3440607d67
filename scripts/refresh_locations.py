#!/usr/bin/env python3
"""Recompute the hot locations table.

Run from cron (the original site refreshed it daily):

    0 4 * * * cd /srv/forum && python scripts/refresh_locations.py
"""

import asyncio
import sys

import logfire

from forum.application.usecase.location import RefreshLocationsUseCase
from forum.config import Settings
from forum.util.di.container import create_container
from forum.util.logging import setup_logging
from forum.util.observability import configure_logfire


async def refresh() -> int:
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(RefreshLocationsUseCase)
            result = await use_case.execute()
    finally:
        await container.close()

    logfire.info(
        "Location refresh finished", locations=result.locations, users=result.users
    )
    return 0


def main() -> int:
    """Run one aggregation pass and log any errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings, service_name="forum-locations")

    try:
        return asyncio.run(refresh())
    except Exception as e:
        logfire.error(
            "Location refresh failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
