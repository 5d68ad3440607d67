"""Mail adapters."""

from .mailer import CeleryMailer, MockMailer, SentMail

__all__ = ["CeleryMailer", "MockMailer", "SentMail"]
