"""Mail infrastructure providers."""

from dishka import Scope, provide

from commentary.adapter.mail import SmtpMailSender
from commentary.config import MailSettings
from commentary.domain.service import MailSender
from commentary.util.di.base import ProviderBase


class MailProvider(ProviderBase):
    """Mail component base."""

    __mock_component__ = "mail"


class ProdMailProvider(MailProvider):
    """Production mail provider sending over SMTP."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_mail_sender(self, settings: MailSettings) -> MailSender:
        """Provide SMTP mail sender."""
        return SmtpMailSender(settings)
