"""Mock mail providers for testing."""

from dishka import Scope, provide

from commentary.adapter.mail import MockMailSender
from commentary.domain.service import MailSender
from commentary.util.di.infrastructure.mail import MailProvider


class MockMailProvider(MailProvider):
    """Mock mail provider collecting messages instead of sending them."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_mail_sender(self) -> MailSender:
        """Provide mock mail sender."""
        return MockMailSender()
