"""SMTP mailer — message assembly and relay handshake with smtplib patched out."""

from unittest.mock import MagicMock

import pytest

from payouts.infrastructure import smtp_mailer
from payouts.infrastructure.smtp_mailer import SmtpMailer


@pytest.fixture
def fake_smtp(monkeypatch):
    server = MagicMock()
    factory = MagicMock()
    factory.return_value.__enter__.return_value = server
    monkeypatch.setattr(smtp_mailer.smtplib, "SMTP", factory)
    return factory, server


def test_not_configured_without_host():
    assert not SmtpMailer(host=None, sender="a@b.c").is_configured
    assert not SmtpMailer(host="", sender="a@b.c").is_configured


def test_sender_defaults_to_user():
    mailer = SmtpMailer(host="smtp.example", user="ops@example.com")
    assert mailer.sender == "ops@example.com"
    assert mailer.is_configured


async def test_send_logs_in_and_delivers(fake_smtp):
    factory, server = fake_smtp
    mailer = SmtpMailer(
        host="smtp.example", port=2525, user="ops@example.com",
        password="secret", timeout_seconds=5,
    )
    await mailer.send("owner@example.com", "Subject line", "Body text")

    factory.assert_called_once_with("smtp.example", 2525, timeout=5)
    server.starttls.assert_called_once()
    server.login.assert_called_once_with("ops@example.com", "secret")
    sender, recipients, raw = server.sendmail.call_args.args
    assert sender == "ops@example.com"
    assert recipients == ["owner@example.com"]
    assert "Subject: Subject line" in raw


async def test_send_skips_starttls_and_login_when_disabled(fake_smtp):
    _, server = fake_smtp
    mailer = SmtpMailer(host="relay.local", sender="noreply@example.com", starttls=False)
    await mailer.send("owner@example.com", "s", "b")
    server.starttls.assert_not_called()
    server.login.assert_not_called()


async def test_send_propagates_delivery_failure(fake_smtp):
    _, server = fake_smtp
    server.sendmail.side_effect = OSError("relay down")
    mailer = SmtpMailer(host="relay.local", sender="noreply@example.com")
    with pytest.raises(OSError):
        await mailer.send("owner@example.com", "s", "b")
