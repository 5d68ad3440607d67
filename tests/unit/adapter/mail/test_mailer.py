"""Unit tests for the mailers."""

import pytest
from kombu.exceptions import OperationalError

from forum.adapter.mail import CeleryMailer, MockMailer
from forum.adapter.mail import mailer as mailer_module
from tests.factories import make_user


class FakeTask:
    """Stands in for a Celery task; records ``delay`` calls."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple] = []

    def delay(self, *args):
        if self.error:
            raise self.error
        self.calls.append(args)


class TestCeleryMailer:
    """Tests for queueing mail on the broker."""

    @pytest.mark.asyncio
    async def test_queues_welcome_mail(self, monkeypatch):
        task = FakeTask()
        monkeypatch.setattr(mailer_module, "send_welcome_mail", task)

        await CeleryMailer().send_welcome(make_user("alice"))

        assert task.calls == [("alice@example.com", "alice")]

    @pytest.mark.asyncio
    async def test_queues_reset_password_mail(self, monkeypatch):
        task = FakeTask()
        monkeypatch.setattr(mailer_module, "send_reset_password_mail", task)

        await CeleryMailer().send_reset_password_instructions(
            make_user("alice"), "raw-token"
        )

        assert task.calls == [("alice@example.com", "alice", "raw-token")]

    @pytest.mark.asyncio
    async def test_broker_failure_is_not_raised(self, monkeypatch):
        """Should log a broker outage instead of failing the sign-up."""
        task = FakeTask(error=OperationalError("broker down"))
        monkeypatch.setattr(mailer_module, "send_welcome_mail", task)

        await CeleryMailer().send_welcome(make_user("alice"))

        assert task.calls == []


class TestMockMailer:
    @pytest.mark.asyncio
    async def test_records_mail(self):
        mailer = MockMailer()

        await mailer.send_welcome(make_user("alice"))
        await mailer.send_reset_password_instructions(make_user("bob"), "tok")

        assert [(m.kind, m.login, m.token) for m in mailer.sent] == [
            ("welcome", "alice", None),
            ("reset_password", "bob", "tok"),
        ]
