"""Sign-in bookkeeping."""

from datetime import datetime

from forum.domain.model import User

from .capability import AuthCapability


class Trackable:
    capability = AuthCapability.TRACKABLE

    def track_sign_in(self, user: User, ip: str | None, now: datetime) -> User:
        """Record a successful sign-in.

        The previous "current" timestamp and IP move to the "last" slots;
        on the very first sign-in both slots get the same values.
        """
        return user.model_copy(
            update={
                "last_sign_in_at": user.current_sign_in_at or now,
                "last_sign_in_ip": user.current_sign_in_ip or ip,
                "current_sign_in_at": now,
                "current_sign_in_ip": ip,
                "sign_in_count": user.sign_in_count + 1,
            }
        )
