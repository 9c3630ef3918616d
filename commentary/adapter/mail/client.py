"""SMTP mail client.

Sends the multipart (plain text + HTML) mails rendered by the domain.
"""

import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

import logfire

from commentary.config import MailSettings
from commentary.domain.service.mail import MailDeliveryError, MailMessage, MailSender


class SmtpMailSender(MailSender):
    """Mail sender talking to an SMTP server.

    ``smtplib`` is blocking, so each send runs in a worker thread. With
    ``enabled`` off, mails are only logged.
    """

    def __init__(self, settings: MailSettings) -> None:
        """Initialize SMTP sender.

        Args:
            settings: SMTP configuration
        """
        self.settings = settings

    def _build(self, message: MailMessage) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = formataddr(
            (self.settings.sender_name or "", self.settings.sender_email)
        )
        msg["To"] = ", ".join(message.recipients)
        msg["Subject"] = message.subject
        msg.attach(MIMEText(message.text, "plain", "utf-8"))
        msg.attach(MIMEText(message.html, "html", "utf-8"))
        return msg

    def _deliver(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(
            self.settings.smtp_host,
            self.settings.smtp_port,
            timeout=self.settings.timeout_seconds,
        ) as server:
            if self.settings.use_tls:
                server.starttls()
            if self.settings.smtp_user:
                server.login(self.settings.smtp_user, self.settings.smtp_password or "")
            server.send_message(msg)

    async def send(self, message: MailMessage) -> None:
        """Send a message.

        Args:
            message: The rendered mail

        Raises:
            MailDeliveryError: If the SMTP conversation failed
        """
        if not self.settings.enabled:
            logfire.info(
                "Mail sending disabled, not sent",
                subject=message.subject,
                recipients=len(message.recipients),
            )
            return

        msg = self._build(message)
        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            logfire.error(
                "SMTP delivery failed",
                host=self.settings.smtp_host,
                subject=message.subject,
                error=str(e),
            )
            raise MailDeliveryError(f"SMTP delivery failed: {e}") from e


class MockMailSender(MailSender):
    """Mail sender for tests.

    Keeps every message in ``sent``. Recipients listed in ``failing`` make
    the send raise ``MailDeliveryError``, as an unreachable server would.
    """

    def __init__(self) -> None:
        self.sent: list[MailMessage] = []
        self.failing: set[str] = set()

    async def send(self, message: MailMessage) -> None:
        """Record the message, or fail for recipients marked as failing."""
        if self.failing.intersection(message.recipients):
            raise MailDeliveryError("Mock delivery failure")
        self.sent.append(message)

    def sent_to(self, email: str) -> list[MailMessage]:
        """Messages addressed to a recipient."""
        return [m for m in self.sent if email in m.recipients]
