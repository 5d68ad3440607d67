"""Unit tests for the mail worker tasks."""

import smtplib

import pytest

from forum.worker import tasks


@pytest.fixture
def delivered(monkeypatch):
    """Capture mail instead of talking to SMTP."""
    sent: list[tuple[str, str, str]] = []
    monkeypatch.setattr(
        tasks, "_deliver", lambda to, subject, body: sent.append((to, subject, body))
    )
    return sent


class TestMessages:
    """Tests for mail texts."""

    def test_welcome_message(self):
        subject, body = tasks.welcome_message("alice")

        assert tasks.settings.mail.site_name in subject
        assert "alice" in body

    def test_reset_password_message_contains_token(self):
        subject, body = tasks.reset_password_message("alice", "raw-token")

        assert "reset password" in subject
        assert "raw-token" in body


class TestTasks:
    """Tests for task execution (run locally, no broker)."""

    def test_send_welcome_mail(self, delivered):
        tasks.send_welcome_mail.apply(args=("alice@example.com", "alice")).get()

        [(to, subject, body)] = delivered
        assert to == "alice@example.com"
        assert "alice" in body

    def test_send_reset_password_mail(self, delivered):
        tasks.send_reset_password_mail.apply(
            args=("alice@example.com", "alice", "raw-token")
        ).get()

        [(to, _, body)] = delivered
        assert to == "alice@example.com"
        assert "raw-token" in body

    def test_smtp_failure_is_retried(self, monkeypatch):
        attempts = []

        def failing_deliver(to, subject, body):
            attempts.append(to)
            raise smtplib.SMTPServerDisconnected("gone")

        monkeypatch.setattr(tasks, "_deliver", failing_deliver)

        result = tasks.send_welcome_mail.apply(args=("alice@example.com", "alice"))

        assert result.failed()
        assert len(attempts) == tasks.send_welcome_mail.max_retries + 1
