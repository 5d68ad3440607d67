"""Integration test configuration.

Integration tests talk to the Postgres instance from ``DATABASE__URL``
(see docker-compose). They are skipped when that server cannot be reached.
"""

import socket

import pytest
from sqlalchemy.engine import make_url

from forum.config import Settings


def _database_reachable() -> bool:
    url = make_url(Settings().database.url)
    try:
        with socket.create_connection((url.host or "localhost", url.port or 5432), 1):
            return True
    except OSError:
        return False


def pytest_collection_modifyitems(config, items):
    integration_items = [item for item in items if "integration" in item.path.parts]
    if not integration_items or _database_reachable():
        return

    skip = pytest.mark.skip(reason="Postgres is not reachable")
    for item in integration_items:
        item.add_marker(skip)
