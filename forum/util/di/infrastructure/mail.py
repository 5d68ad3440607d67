"""Mail infrastructure providers."""

from dishka import Scope, provide

from forum.adapter.mail import CeleryMailer
from forum.domain.service import Mailer
from forum.util.di.base import ProviderBase
from forum.util.observability import instrument_celery


class MailProvider(ProviderBase):
    """Mail component base."""

    __mock_component__ = "mail"


class ProdMailProvider(MailProvider):
    """Production mail provider queueing on Celery."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_mailer(self) -> Mailer:
        """Provide the Celery mailer."""
        instrument_celery()
        return CeleryMailer()
