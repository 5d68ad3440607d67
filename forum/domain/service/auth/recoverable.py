"""Password reset tokens."""

import hashlib
import secrets
from datetime import datetime, timedelta

from forum.domain.model import User

from .capability import AuthCapability


class Recoverable:
    """Issues and checks password reset tokens.

    Only a SHA-256 digest of the token is stored on the user; the raw
    token is handed to the mailer once and never persisted.
    """

    capability = AuthCapability.RECOVERABLE

    def __init__(self, reset_password_within: timedelta) -> None:
        self.reset_password_within = reset_password_within

    @staticmethod
    def digest(raw_token: str) -> str:
        return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()

    def generate_reset_token(self, user: User, now: datetime) -> tuple[User, str]:
        """Attach a fresh reset token to ``user``.

        Returns:
            Tuple of (updated user, raw token)
        """
        raw_token = secrets.token_urlsafe(20)
        updated = user.model_copy(
            update={
                "reset_password_token": self.digest(raw_token),
                "reset_password_sent_at": now,
            }
        )
        return updated, raw_token

    def is_reset_period_valid(self, user: User, now: datetime) -> bool:
        if user.reset_password_sent_at is None:
            return False
        return user.reset_password_sent_at + self.reset_password_within >= now

    def clear_reset_token(self, user: User) -> User:
        return user.model_copy(
            update={"reset_password_token": None, "reset_password_sent_at": None}
        )
