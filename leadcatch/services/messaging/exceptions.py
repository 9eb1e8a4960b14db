"""Messaging exceptions."""


class NotificationError(Exception):
    """Base exception for outbound email/SMS delivery."""


class MessagingConfigurationError(NotificationError):
    """Raised when provider credentials or sender identity are missing."""


class DeliveryError(NotificationError):
    """Raised when a provider rejects or fails to deliver a message."""

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(f"[{provider}] {message}")


class EmailDeliveryError(DeliveryError):
    """Raised when an email could not be sent."""


class SmsDeliveryError(DeliveryError):
    """Raised when an SMS could not be sent."""
