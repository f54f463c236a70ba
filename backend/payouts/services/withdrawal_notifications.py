"""Withdrawal Notifications — best-effort emails for the withdrawal lifecycle.

Invariants:
    - Never raises: delivery failures are logged and swallowed
    - Admin alert goes to ADMIN_EMAIL, else SMTP_USER; skipped if neither is set
    - Restaurant emails skip addresses on the placeholder domain
    - Requests are referred to by their short reference, never the full id

Design Decisions:
    - Scheduled through FastAPI BackgroundTasks by the routes, so sending
      happens after the response and outside the request's DB session
"""

import logging
from functools import lru_cache

from payouts.config import get_settings
from payouts.core.domain_types import WithdrawalStatus
from payouts.core.wallet_ledger import short_reference
from payouts.infrastructure.smtp_mailer import SmtpMailer

logger = logging.getLogger(__name__)


class WithdrawalNotifier:
    """Composes and sends withdrawal emails through an SmtpMailer."""

    def __init__(
        self,
        mailer: SmtpMailer,
        admin_email: str | None,
        placeholder_domain: str | None = None,
    ):
        self.mailer = mailer
        self.admin_email = admin_email
        self.placeholder_domain = placeholder_domain

    def can_email_restaurant(self, recipient: str | None) -> bool:
        if not recipient:
            return False
        if self.placeholder_domain and self.placeholder_domain in recipient:
            return False
        return True

    async def notify_request_created(
        self, restaurant_name: str, amount: float, request_id,
    ) -> None:
        """Alert the admin inbox that a restaurant asked for a withdrawal."""
        if not self.admin_email:
            logger.info("No admin email configured, skipping withdrawal alert")
            return
        ref = short_reference(request_id)
        subject = f"New withdrawal request #{ref}"
        body = (
            f"{restaurant_name} has requested a withdrawal of Rs {amount:.2f}.\n"
            f"Request reference: {ref}\n"
            "Review it in the admin panel under Withdrawal Requests."
        )
        await self._deliver(self.admin_email, subject, body, "withdrawal alert")

    async def notify_status_changed(
        self,
        recipient: str | None,
        status: WithdrawalStatus,
        amount: float,
        request_id,
        rejection_reason: str | None = None,
    ) -> None:
        """Tell the restaurant its request was approved or rejected."""
        if not self.can_email_restaurant(recipient):
            logger.info(
                "No deliverable restaurant email, skipping status email",
                extra={"withdrawal_request_id": str(request_id)},
            )
            return
        ref = short_reference(request_id)
        subject = f"Withdrawal request #{ref} {status.value.lower()}"
        lines = [
            f"Your withdrawal request #{ref} for Rs {amount:.2f} "
            f"has been {status.value.lower()}.",
        ]
        if status == WithdrawalStatus.APPROVED:
            lines.append("The amount will be transferred to your registered account.")
        elif status == WithdrawalStatus.REJECTED:
            lines.append("The amount has been returned to your wallet balance.")
            if rejection_reason:
                lines.append(f"Reason: {rejection_reason}")
        await self._deliver(
            recipient, subject, "\n".join(lines),
            f"withdrawal {status.value.lower()} email",
        )

    async def _deliver(self, to: str, subject: str, body: str, what: str) -> None:
        if not self.mailer.is_configured:
            logger.info(f"SMTP not configured, skipping {what}")
            return
        try:
            await self.mailer.send(to, subject, body)
        except Exception as e:
            logger.error(f"Failed to send {what}: {e}", extra={"recipient": to})


@lru_cache
def get_notifier() -> WithdrawalNotifier:
    """FastAPI dependency — one notifier per process, built from settings."""
    settings = get_settings()
    mailer = SmtpMailer(
        host=settings.smtp_host,
        port=settings.smtp_port,
        user=settings.smtp_user,
        password=settings.smtp_password,
        sender=settings.smtp_from,
        starttls=settings.smtp_starttls,
        timeout_seconds=settings.smtp_timeout_seconds,
    )
    return WithdrawalNotifier(
        mailer,
        admin_email=settings.withdrawal_alert_recipient,
        placeholder_domain=settings.placeholder_email_domain,
    )
