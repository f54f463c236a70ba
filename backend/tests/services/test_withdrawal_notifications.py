"""Withdrawal notifications — recipients, content, and swallowing of failures."""

import logging
from uuid import UUID

import pytest

from payouts.core.domain_types import WithdrawalStatus
from payouts.services.withdrawal_notifications import WithdrawalNotifier

REQUEST_ID = UUID("00000000-0000-0000-0000-00000000abc1")


class _FakeMailer:
    def __init__(self, configured=True, fail=False):
        self.is_configured = configured
        self.fail = fail
        self.sent = []

    async def send(self, to_email, subject, body):
        if self.fail:
            raise ConnectionError("relay refused")
        self.sent.append({"to": to_email, "subject": subject, "body": body})


def _notifier(mailer=None, admin_email="admin@payouts.example"):
    return WithdrawalNotifier(
        mailer or _FakeMailer(), admin_email,
        placeholder_domain="@restaurant.appzeto.com",
    )


async def test_request_alert_goes_to_admin_with_short_reference():
    mailer = _FakeMailer()
    await _notifier(mailer).notify_request_created("Spice Garden", 250.0, REQUEST_ID)
    assert len(mailer.sent) == 1
    email = mailer.sent[0]
    assert email["to"] == "admin@payouts.example"
    assert "#00ABC1" in email["subject"]
    assert "Spice Garden" in email["body"]
    assert "Rs 250.00" in email["body"]


async def test_request_alert_skipped_without_admin_email():
    mailer = _FakeMailer()
    await _notifier(mailer, admin_email=None).notify_request_created(
        "Spice Garden", 250.0, REQUEST_ID,
    )
    assert mailer.sent == []


async def test_status_email_for_rejection_includes_reason():
    mailer = _FakeMailer()
    await _notifier(mailer).notify_status_changed(
        "owner@spicegarden.example", WithdrawalStatus.REJECTED, 99.5,
        REQUEST_ID, "Bank account unverified",
    )
    email = mailer.sent[0]
    assert email["subject"].endswith("rejected")
    assert "Reason: Bank account unverified" in email["body"]
    assert "returned to your wallet" in email["body"]


async def test_status_email_for_approval():
    mailer = _FakeMailer()
    await _notifier(mailer).notify_status_changed(
        "owner@spicegarden.example", WithdrawalStatus.APPROVED, 99.5, REQUEST_ID,
    )
    assert "approved" in mailer.sent[0]["body"]


@pytest.mark.parametrize("recipient", [None, "", "kitchen@restaurant.appzeto.com"])
async def test_status_email_skips_missing_or_placeholder_recipient(recipient):
    mailer = _FakeMailer()
    await _notifier(mailer).notify_status_changed(
        recipient, WithdrawalStatus.APPROVED, 10.0, REQUEST_ID,
    )
    assert mailer.sent == []


async def test_unconfigured_mailer_is_skipped():
    mailer = _FakeMailer(configured=False)
    await _notifier(mailer).notify_request_created("Spice Garden", 1.0, REQUEST_ID)
    assert mailer.sent == []


async def test_delivery_failure_is_logged_not_raised(caplog):
    mailer = _FakeMailer(fail=True)
    with caplog.at_level(logging.ERROR):
        await _notifier(mailer).notify_status_changed(
            "owner@spicegarden.example", WithdrawalStatus.APPROVED, 10.0, REQUEST_ID,
        )
    assert "relay refused" in caplog.text
