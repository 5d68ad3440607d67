"""Persistent "remember me" sign-ins."""

from datetime import datetime, timedelta

from forum.domain.model import User

from .capability import AuthCapability


class Rememberable:
    capability = AuthCapability.REMEMBERABLE

    def __init__(self, remember_for: timedelta) -> None:
        self.remember_for = remember_for

    def remember_me(self, user: User, now: datetime) -> User:
        """Start a remembered session unless one is already running."""
        if user.remember_created_at is not None and not self.is_remember_expired(
            user, now
        ):
            return user
        return user.model_copy(update={"remember_created_at": now})

    def forget_me(self, user: User) -> User:
        return user.model_copy(update={"remember_created_at": None})

    def is_remember_expired(self, user: User, now: datetime) -> bool:
        if user.remember_created_at is None:
            return True
        return user.remember_created_at + self.remember_for <= now
