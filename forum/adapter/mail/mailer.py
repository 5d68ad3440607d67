"""Mail delivery through the Celery worker."""

import logfire
from kombu.exceptions import KombuError
from pydantic import BaseModel

from forum.domain.model import User
from forum.domain.service.mail_service import Mailer
from forum.worker.tasks import send_reset_password_mail, send_welcome_mail


class CeleryMailer(Mailer):
    """Queues mail on the Celery broker and returns immediately."""

    async def send_welcome(self, user: User) -> None:
        """Queue the welcome mail."""
        try:
            send_welcome_mail.delay(user.email, user.login)
        except KombuError as e:
            logfire.error(
                "Failed to queue welcome mail", user_id=str(user.id), error=str(e)
            )
            return
        logfire.info("Welcome mail queued", user_id=str(user.id))

    async def send_reset_password_instructions(
        self, user: User, raw_token: str
    ) -> None:
        """Queue the reset password mail."""
        try:
            send_reset_password_mail.delay(user.email, user.login, raw_token)
        except KombuError as e:
            logfire.error(
                "Failed to queue reset password mail",
                user_id=str(user.id),
                error=str(e),
            )
            return
        logfire.info("Reset password mail queued", user_id=str(user.id))


class SentMail(BaseModel):
    """Mail recorded by ``MockMailer``."""

    kind: str
    email: str
    login: str
    token: str | None = None


class MockMailer(Mailer):
    """Mock mailer for testing.

    Records mail instead of sending it.
    """

    def __init__(self) -> None:
        self.sent: list[SentMail] = []

    async def send_welcome(self, user: User) -> None:
        self.sent.append(SentMail(kind="welcome", email=user.email, login=user.login))

    async def send_reset_password_instructions(
        self, user: User, raw_token: str
    ) -> None:
        self.sent.append(
            SentMail(
                kind="reset_password",
                email=user.email,
                login=user.login,
                token=raw_token,
            )
        )
