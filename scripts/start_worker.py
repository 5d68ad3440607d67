#!/usr/bin/env python3
"""Start the Celery mail worker with Logfire error tracking for startup errors."""

import sys

import logfire

from forum.config import Settings
from forum.util.logging import setup_logging
from forum.util.observability import configure_logfire, instrument_celery


def main() -> int:
    """Start the worker and log any startup errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings, service_name="forum-worker")
    instrument_celery()

    try:
        logfire.info("Starting mail worker")

        from forum.worker.celery_app import celery_app

        celery_app.worker_main(["worker", "--loglevel=INFO", "--concurrency=2"])
        return 0

    except Exception as e:
        logfire.error(
            "Worker startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
