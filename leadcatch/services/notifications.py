"""Notification dispatcher — fans a new submission out to the four notification channels.

Channels:
    admin_email   email to the tenant-configured address
    admin_sms     SMS to the tenant-configured phone
    client_email  email to the respondent's contact email
    client_sms    SMS to the respondent's contact phone

Each channel is resolved, templated and sent independently. A disabled
channel or an empty destination is skipped silently; a failing channel is
logged and reported in its outcome, and never stops the other channels.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from leadcatch.core.config import settings
from leadcatch.schemas.forms import ChannelName, ContactValue, NotificationChannelConfig, NotificationSettings
from leadcatch.services import templates
from leadcatch.services.messaging import BaseEmailSender, BaseSmsSender, MessagingConfigurationError

logger = logging.getLogger(__name__)

ChannelKind = Literal["email", "sms"]


@dataclass(frozen=True)
class Channel:
    name: ChannelName
    kind: ChannelKind
    audience: Literal["admin", "client"]
    default_subject: str | None
    default_body: str


CHANNELS: tuple[Channel, ...] = (
    Channel(
        name="admin_email",
        kind="email",
        audience="admin",
        default_subject="Nouveau dossier {{ticket}}",
        default_body=(
            "Bonjour,\n\nUn nouveau dossier a été soumis par {{client_phone}} (Ticket: {{ticket}}).\n\n"
            "Connectez-vous au dashboard pour voir les photos et détails."
        ),
    ),
    Channel(
        name="admin_sms",
        kind="sms",
        audience="admin",
        default_subject=None,
        default_body="Alerte: Nouveau dossier {{ticket}} reçu de {{client_phone}}.",
    ),
    Channel(
        name="client_email",
        kind="email",
        audience="client",
        default_subject="Confirmation de votre dossier {{ticket}}",
        default_body=(
            "Bonjour,\n\nNous avons bien reçu votre demande.\nVotre numéro de suivi est : {{ticket}}.\n\n"
            "Nous revenons vers vous rapidement.\n\nCordialement,\n{{company}}"
        ),
    ),
    Channel(
        name="client_sms",
        kind="sms",
        audience="client",
        default_subject=None,
        default_body="Merci. Dossier {{ticket}} bien reçu. Nous vous recontactons vite. {{company}}",
    ),
)


@dataclass
class ResolvedMessage:
    channel: Channel
    destination: str
    subject: str | None
    body: str


@dataclass
class ChannelOutcome:
    channel: ChannelName
    status: Literal["sent", "skipped", "failed"]
    destination: str = ""
    message_id: str | None = None
    error: str | None = None


def build_context(ticket: str, client_phone: str, company: str, when: datetime) -> dict[str, str]:
    """Variables available to notification templates."""
    return {
        "ticket": ticket,
        "client_phone": client_phone,
        "company": company,
        "date": when.strftime("%d/%m/%Y"),
    }


def resolve_destination(channel: Channel, config: NotificationChannelConfig, contact: ContactValue | None) -> str:
    if channel.audience == "admin":
        return config.destination.strip()
    if contact is None:
        return ""
    if channel.kind == "email":
        return contact.email.strip()
    return contact.phone.strip()


def resolve_message(
    channel: Channel,
    config: NotificationChannelConfig,
    context: dict[str, str],
    contact: ContactValue | None = None,
) -> ResolvedMessage | None:
    """Template one channel, or return None when it must be skipped."""
    if not config.enabled:
        return None
    destination = resolve_destination(channel, config, contact)
    if not destination:
        return None

    subject = None
    if channel.kind == "email":
        subject = templates.render(config.subject_template or channel.default_subject, context)
    body = templates.render(config.body_template or channel.default_body, context)
    return ResolvedMessage(channel=channel, destination=destination, subject=subject, body=body)


class NotificationDispatcher:
    """Sends the configured notifications for one submission.

    Senders are optional: a channel whose sender is not configured fails on
    its own, like any other delivery error.
    """

    def __init__(
        self,
        email_sender: BaseEmailSender | None,
        sms_sender: BaseSmsSender | None,
        timeout_seconds: float | None = None,
    ) -> None:
        self._email_sender = email_sender
        self._sms_sender = sms_sender
        self._timeout = timeout_seconds if timeout_seconds is not None else settings.NOTIFICATION_SEND_TIMEOUT_SECONDS

    async def dispatch(
        self,
        notifications: NotificationSettings,
        context: dict[str, str],
        contact: ContactValue | None = None,
    ) -> list[ChannelOutcome]:
        """Resolve and send all four channels concurrently. Never raises."""
        ticket = context.get("ticket", "")
        pending = []
        outcomes: dict[ChannelName, ChannelOutcome] = {}

        for channel in CHANNELS:
            message = resolve_message(channel, notifications.channel(channel.name), context, contact)
            if message is None:
                outcomes[channel.name] = ChannelOutcome(channel=channel.name, status="skipped")
                continue
            pending.append(self._deliver(message, ticket))

        for outcome in await asyncio.gather(*pending):
            outcomes[outcome.channel] = outcome

        sent = sum(1 for o in outcomes.values() if o.status == "sent")
        failed = sum(1 for o in outcomes.values() if o.status == "failed")
        logger.info("Notifications for %s: sent=%d failed=%d", ticket, sent, failed)
        return [outcomes[channel.name] for channel in CHANNELS]

    async def _deliver(self, message: ResolvedMessage, ticket: str) -> ChannelOutcome:
        name = message.channel.name
        try:
            result = await asyncio.wait_for(self._send(message), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.error("Notification %s for %s timed out after %.1fs", name, ticket, self._timeout)
            return ChannelOutcome(
                channel=name, status="failed", destination=message.destination, error="timeout"
            )
        except Exception as exc:
            logger.exception("Notification %s for %s failed", name, ticket)
            return ChannelOutcome(channel=name, status="failed", destination=message.destination, error=str(exc))

        logger.info("Notification %s for %s sent to %s", name, ticket, message.destination)
        return ChannelOutcome(
            channel=name,
            status="sent",
            destination=message.destination,
            message_id=result.message_id,
        )

    async def _send(self, message: ResolvedMessage):
        if message.channel.kind == "email":
            if self._email_sender is None:
                raise MessagingConfigurationError("No email sender configured")
            return await self._email_sender.send(message.destination, message.subject or "", message.body)
        if self._sms_sender is None:
            raise MessagingConfigurationError("No SMS sender configured")
        return await self._sms_sender.send(message.destination, message.body)
