"""Messaging service — outbound email (Resend) and SMS (Twilio)."""

import logging
import threading

from leadcatch.services.messaging.base import BaseEmailSender, BaseSmsSender
from leadcatch.services.messaging.exceptions import (
    DeliveryError,
    EmailDeliveryError,
    MessagingConfigurationError,
    NotificationError,
    SmsDeliveryError,
)
from leadcatch.services.messaging.models import SendResult
from leadcatch.services.messaging.resend import ResendEmailSender
from leadcatch.services.messaging.twilio import TwilioSmsSender

logger = logging.getLogger(__name__)

__all__ = [
    "BaseEmailSender",
    "BaseSmsSender",
    "DeliveryError",
    "EmailDeliveryError",
    "MessagingConfigurationError",
    "NotificationError",
    "ResendEmailSender",
    "SendResult",
    "SmsDeliveryError",
    "TwilioSmsSender",
    "get_email_sender",
    "get_sms_sender",
]

# Lazy-initialized providers (avoids import-time errors when creds missing)
_sms_sender: TwilioSmsSender | None = None
_email_sender: ResendEmailSender | None = None
_lock = threading.Lock()


def get_sms_sender() -> TwilioSmsSender:
    """Get or create the Twilio SMS sender.

    Raises MessagingConfigurationError if credentials are not configured.
    """
    global _sms_sender  # noqa: PLW0603
    if _sms_sender is not None:
        return _sms_sender

    with _lock:
        if _sms_sender is not None:
            return _sms_sender

        from leadcatch.core.config import settings

        if not settings.TWILIO_ACCOUNT_SID or not settings.TWILIO_AUTH_TOKEN:
            raise MessagingConfigurationError(
                "Twilio credentials not configured. "
                "Set TWILIO_ACCOUNT_SID and TWILIO_AUTH_TOKEN environment variables."
            )

        _sms_sender = TwilioSmsSender(
            account_sid=settings.TWILIO_ACCOUNT_SID,
            auth_token=settings.TWILIO_AUTH_TOKEN,
            default_from_number=settings.TWILIO_PHONE_NUMBER,
        )
        logger.info("Twilio SMS sender initialized")
        return _sms_sender


def get_email_sender() -> ResendEmailSender:
    """Get or create the Resend email sender.

    Raises MessagingConfigurationError if the API key is not configured.
    """
    global _email_sender  # noqa: PLW0603
    if _email_sender is not None:
        return _email_sender

    with _lock:
        if _email_sender is not None:
            return _email_sender

        from leadcatch.core.config import settings

        if not settings.RESEND_API_KEY:
            raise MessagingConfigurationError("Resend API key not configured. Set the RESEND_API_KEY environment variable.")

        _email_sender = ResendEmailSender(
            api_key=settings.RESEND_API_KEY,
            from_email=settings.EMAIL_FROM,
            from_name=settings.EMAIL_FROM_NAME,
        )
        logger.info("Resend email sender initialized")
        return _email_sender
