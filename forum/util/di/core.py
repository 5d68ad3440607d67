"""Core DI providers (non-mockable)."""

from datetime import datetime, timezone
from typing import Callable, NewType

from dishka import Scope, provide

from forum.config import AuthSettings, Settings
from forum.util.di.base import ProviderBase

# Source of "now" shared by the domain services
Clock = NewType("Clock", Callable[[], datetime])


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_clock(self) -> Clock:
        """Provide the UTC clock."""
        return Clock(utc_now)
