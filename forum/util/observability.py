"""Observability configuration using Logfire.

Usage:
    import logfire

    # Structured logging
    logfire.info("User registered", user_id=str(user.id), login=user.login)

    # Manual spans for critical operations
    with logfire.span("location_service.compute_location_popularity"):
        ...
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

from forum.config import Settings


def configure_logfire(settings: Settings, service_name: str = "forum-backend") -> None:
    """Configure Logfire for observability.

    Cloud sending is enabled when ``OBSERVABILITY__SEND_TO_LOGFIRE`` says
    so, or otherwise whenever ``OBSERVABILITY__LOGFIRE_TOKEN`` is set.

    Args:
        settings: Application settings
        service_name: Reported service name (the worker uses its own)
    """
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    else:
        send_to_logfire = bool(settings.observability.logfire_token)

    config_kwargs = {
        "service_name": service_name,
        "service_version": "1.0.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(settings.observability.logfire_token),
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL queries, durations and transaction boundaries.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,
    )
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Trace outbound HTTP requests (GitHub API)."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")


def instrument_redis() -> None:
    """Trace cache commands."""
    logfire.instrument_redis()
    logfire.info("Redis instrumented")


def instrument_celery() -> None:
    """Trace task publishing and execution."""
    logfire.instrument_celery()
    logfire.info("Celery instrumented")
