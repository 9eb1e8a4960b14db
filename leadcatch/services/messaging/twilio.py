"""Twilio SMS sender."""

import asyncio
import logging
from functools import partial

from twilio.rest import Client

from leadcatch.services.messaging.base import BaseSmsSender
from leadcatch.services.messaging.exceptions import MessagingConfigurationError, SmsDeliveryError
from leadcatch.services.messaging.models import SendResult

logger = logging.getLogger(__name__)


class TwilioSmsSender(BaseSmsSender):
    """Sends SMS through the Twilio Messages API."""

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        default_from_number: str,
    ) -> None:
        if not account_sid or not auth_token:
            raise MessagingConfigurationError("TWILIO_ACCOUNT_SID and TWILIO_AUTH_TOKEN are required")
        self._default_from_number = default_from_number
        self._client = Client(account_sid, auth_token)

    @property
    def name(self) -> str:
        return "twilio"

    @property
    def default_from_number(self) -> str:
        return self._default_from_number

    async def send(self, to: str, body: str, sender_id: str | None = None) -> SendResult:
        sender = sender_id or self._default_from_number
        if not sender:
            raise MessagingConfigurationError("No sender id given and no default Twilio number configured")

        loop = asyncio.get_running_loop()
        try:
            message = await loop.run_in_executor(
                None,
                partial(
                    self._client.messages.create,
                    to=to,
                    from_=sender,
                    body=body,
                ),
            )
        except Exception as exc:
            raise SmsDeliveryError("twilio", f"Failed to send SMS to {to}: {exc}") from exc

        logger.info("Twilio SMS sent: sid=%s to=%s status=%s", message.sid, to, message.status)
        return SendResult(message_id=message.sid, status=message.status or "queued")
