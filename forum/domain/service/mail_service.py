"""Outbound mail interface."""

from forum.domain.model import User


class Mailer:
    """Fire-and-forget mail delivery.

    Implementations hand the message off and return; delivery failures
    are the transport's concern, never the caller's.
    """

    async def send_welcome(self, user: User) -> None:
        """Send the welcome mail to a newly created user.

        Args:
            user: The user that was just created
        """
        raise NotImplementedError

    async def send_reset_password_instructions(
        self, user: User, raw_token: str
    ) -> None:
        """Send a password reset link.

        Args:
            user: User requesting the reset
            raw_token: Token to embed in the link
        """
        raise NotImplementedError
