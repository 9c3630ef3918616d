"""Unit tests for SmtpMailSender."""

import smtplib

import pytest

from commentary.adapter.mail import SmtpMailSender
from commentary.adapter.mail import client as mail_client
from commentary.config import MailSettings
from commentary.domain.error import DomainError
from commentary.domain.service.mail import MailDeliveryError, MailMessage

MESSAGE = MailMessage(
    recipients=["ada@example.org"],
    subject="A new reply has been posted",
    html="<p>Hello</p>",
    text="Hello",
)


class FakeSMTP:
    """Records the SMTP conversation instead of opening a connection."""

    instances: list["FakeSMTP"] = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.calls = []
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(("login", user, password))

    def send_message(self, msg):
        self.sent.append(msg)


class RefusingSMTP(FakeSMTP):
    def send_message(self, msg):
        raise smtplib.SMTPRecipientsRefused({"ada@example.org": (550, b"no")})


@pytest.fixture(autouse=True)
def reset_fake():
    FakeSMTP.instances = []


class TestSmtpMailSender:
    """Tests for SmtpMailSender."""

    @pytest.mark.asyncio
    async def test_disabled_sender_only_logs(self, monkeypatch):
        """With sending disabled no connection is opened."""
        # Arrange
        monkeypatch.setattr(mail_client.smtplib, "SMTP", FakeSMTP)
        sender = SmtpMailSender(MailSettings(enabled=False))

        # Act
        await sender.send(MESSAGE)

        # Assert
        assert FakeSMTP.instances == []

    @pytest.mark.asyncio
    async def test_multipart_message(self, monkeypatch):
        # Arrange
        monkeypatch.setattr(mail_client.smtplib, "SMTP", FakeSMTP)
        sender = SmtpMailSender(
            MailSettings(
                enabled=True,
                smtp_host="smtp.example.org",
                smtp_user="mailer",
                smtp_password="secret",
                sender_email="comments@example.org",
                sender_name="Comments",
            )
        )

        # Act
        await sender.send(MESSAGE)

        # Assert
        (smtp,) = FakeSMTP.instances
        assert smtp.host == "smtp.example.org"
        assert smtp.calls == ["starttls", ("login", "mailer", "secret")]
        (msg,) = smtp.sent
        assert msg["To"] == "ada@example.org"
        assert msg["From"] == "Comments <comments@example.org>"
        assert msg["Subject"] == MESSAGE.subject
        assert [part.get_content_type() for part in msg.get_payload()] == [
            "text/plain",
            "text/html",
        ]

    @pytest.mark.asyncio
    async def test_no_tls_no_login(self, monkeypatch):
        monkeypatch.setattr(mail_client.smtplib, "SMTP", FakeSMTP)
        sender = SmtpMailSender(MailSettings(enabled=True, use_tls=False))

        await sender.send(MESSAGE)

        assert FakeSMTP.instances[0].calls == []

    @pytest.mark.asyncio
    async def test_refused_delivery(self, monkeypatch):
        """SMTP failures surface as MailDeliveryError."""
        # Arrange
        monkeypatch.setattr(mail_client.smtplib, "SMTP", RefusingSMTP)
        sender = SmtpMailSender(MailSettings(enabled=True))

        # Act / Assert
        with pytest.raises(MailDeliveryError):
            await sender.send(MESSAGE)

    @pytest.mark.asyncio
    async def test_unreachable_server(self, monkeypatch):
        def refuse_connection(*args, **kwargs):
            raise ConnectionRefusedError("connection refused")

        monkeypatch.setattr(mail_client.smtplib, "SMTP", refuse_connection)
        sender = SmtpMailSender(MailSettings(enabled=True))

        with pytest.raises(MailDeliveryError):
            await sender.send(MESSAGE)

    @pytest.mark.asyncio
    async def test_delivery_error_is_a_domain_error(self, monkeypatch):
        """Domain services catch the failure without knowing the adapter."""
        # Arrange
        monkeypatch.setattr(mail_client.smtplib, "SMTP", RefusingSMTP)
        sender = SmtpMailSender(MailSettings(enabled=True))

        # Act / Assert
        with pytest.raises(DomainError) as exc_info:
            await sender.send(MESSAGE)
        assert isinstance(exc_info.value, MailDeliveryError)
        assert isinstance(exc_info.value.__cause__, smtplib.SMTPException)
