"""Resend email sender."""

import asyncio
import logging
from functools import partial

import resend

from leadcatch.services.messaging.base import BaseEmailSender
from leadcatch.services.messaging.exceptions import EmailDeliveryError, MessagingConfigurationError
from leadcatch.services.messaging.models import SendResult

logger = logging.getLogger(__name__)


class ResendEmailSender(BaseEmailSender):
    """Sends plain-text email through the Resend API."""

    def __init__(self, api_key: str, from_email: str, from_name: str) -> None:
        if not api_key:
            raise MessagingConfigurationError("RESEND_API_KEY is required")
        resend.api_key = api_key
        self._from = f"{from_name} <{from_email}>"

    @property
    def name(self) -> str:
        return "resend"

    async def send(self, to: str, subject: str, body: str) -> SendResult:
        params = {
            "from": self._from,
            "to": [to],
            "subject": subject,
            "text": body,
        }

        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(None, partial(resend.Emails.send, params))
        except Exception as exc:
            raise EmailDeliveryError("resend", f"Failed to send email to {to}: {exc}") from exc

        # The SDK returns a dict like {"id": "..."} or an object with an id attribute
        if isinstance(response, dict):
            message_id = response.get("id")
        else:
            message_id = getattr(response, "id", None)

        logger.info("Resend email sent: id=%s to=%s", message_id, to)
        return SendResult(message_id=message_id, status="sent")
