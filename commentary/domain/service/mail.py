"""Outgoing mail contract."""

from abc import ABC, abstractmethod

from commentary.domain.error import DomainError
from commentary.domain.model.common import DomainModel


class MailDeliveryError(DomainError):
    """A mail could not be handed over to the mail server."""

    pass


class MailMessage(DomainModel):
    """A rendered mail ready to send."""

    recipients: list[str]
    subject: str
    html: str
    text: str


class MailSender(ABC):
    """Sends mails.

    Implementations raise ``MailDeliveryError`` when the message could not
    be handed over to the mail server.
    """

    @abstractmethod
    async def send(self, message: MailMessage) -> None:
        """Send a message.

        Args:
            message: The rendered mail

        Raises:
            MailDeliveryError: If delivery failed
        """
        pass
