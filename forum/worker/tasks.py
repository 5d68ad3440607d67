"""Mail tasks executed by the Celery worker."""

import smtplib
from email.message import EmailMessage

import logfire

from forum.util.logging import get_logger
from forum.worker.celery_app import celery_app, settings

logger = get_logger(__name__)


def _deliver(to: str, subject: str, body: str) -> None:
    message = EmailMessage()
    message["From"] = settings.mail.sender
    message["To"] = to
    message["Subject"] = subject
    message.set_content(body)

    with smtplib.SMTP(settings.mail.smtp_host, settings.mail.smtp_port) as smtp:
        smtp.send_message(message)
    logger.info("Delivered \"%s\" to %s", subject, to)


def welcome_message(login: str) -> tuple[str, str]:
    """Subject and body of the welcome mail."""
    site = settings.mail.site_name
    subject = f"Welcome to {site}"
    body = (
        f"Hi {login},\n\n"
        f"Your {site} account has been created. "
        "You can now sign in, follow other members and join the discussions.\n"
    )
    return subject, body


def reset_password_message(login: str, token: str) -> tuple[str, str]:
    """Subject and body of the reset password mail."""
    site = settings.mail.site_name
    subject = f"{site} reset password instructions"
    body = (
        f"Hi {login},\n\n"
        "Someone requested a link to change your password. "
        "Use this token to choose a new one:\n\n"
        f"    {token}\n\n"
        "If you didn't request this, please ignore this email.\n"
    )
    return subject, body


@celery_app.task(bind=True, max_retries=3)
def send_welcome_mail(self, email: str, login: str) -> None:
    """Deliver the welcome mail, retrying on SMTP failures."""
    subject, body = welcome_message(login)
    try:
        _deliver(email, subject, body)
    except (smtplib.SMTPException, OSError) as exc:
        logfire.warn("Welcome mail delivery failed", login=login, error=str(exc))
        raise self.retry(exc=exc, countdown=30)


@celery_app.task(bind=True, max_retries=3)
def send_reset_password_mail(self, email: str, login: str, token: str) -> None:
    """Deliver reset password instructions, retrying on SMTP failures."""
    subject, body = reset_password_message(login, token)
    try:
        _deliver(email, subject, body)
    except (smtplib.SMTPException, OSError) as exc:
        logfire.warn("Reset password mail delivery failed", login=login, error=str(exc))
        raise self.retry(exc=exc, countdown=30)
