"""Abstract email and SMS sender interfaces."""

from abc import ABC, abstractmethod

from leadcatch.services.messaging.models import SendResult


class BaseEmailSender(ABC):
    """Abstract base class for email providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier string."""

    @abstractmethod
    async def send(self, to: str, subject: str, body: str) -> SendResult:
        """Send a plain-text email.

        Raises:
            EmailDeliveryError: If the provider fails to accept the message.
        """


class BaseSmsSender(ABC):
    """Abstract base class for SMS providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier string."""

    @abstractmethod
    async def send(self, to: str, body: str, sender_id: str | None = None) -> SendResult:
        """Send an SMS.

        Args:
            to: Destination phone number.
            body: Message text.
            sender_id: Alphanumeric sender id; falls back to the provider's default number.

        Raises:
            SmsDeliveryError: If the provider fails to accept the message.
        """
