"""SMTP Mailer — sends plain-text email through a configured SMTP relay.

Invariants:
    - send() raises on delivery failure; callers decide whether that matters
    - Blocking smtplib calls run in a worker thread (never on the event loop)
    - is_configured is False without a host; callers skip sending in that case
"""

import asyncio
import logging
import smtplib
from email.mime.text import MIMEText

logger = logging.getLogger(__name__)


class SmtpMailer:
    """Thin async wrapper over smtplib.SMTP."""

    def __init__(
        self,
        host: str | None,
        port: int = 587,
        user: str | None = None,
        password: str | None = None,
        sender: str | None = None,
        starttls: bool = True,
        timeout_seconds: int = 15,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender or user
        self.starttls = starttls
        self.timeout_seconds = timeout_seconds

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.sender)

    async def send(self, to_email: str, subject: str, body: str) -> None:
        await asyncio.to_thread(self._send_sync, to_email, subject, body)
        logger.info(f"Email sent: {subject}", extra={"recipient": to_email})

    def _send_sync(self, to_email: str, subject: str, body: str) -> None:
        msg = MIMEText(body, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to_email

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout_seconds) as server:
            if self.starttls:
                server.starttls()
            if self.user and self.password:
                server.login(self.user, self.password)
            server.sendmail(self.sender, [to_email], msg.as_string())
