"""Tests for the notification dispatcher — channel resolution, templating and failure isolation."""

import asyncio
from datetime import datetime

import pytest

from leadcatch.schemas.forms import ContactValue, NotificationChannelConfig, NotificationSettings
from leadcatch.services.notifications import CHANNELS, NotificationDispatcher, build_context, resolve_message

CONTEXT = build_context("#REQ-123456", "0612345678", "Acme", datetime(2026, 3, 14, 10, 30))
CONTACT = ContactValue(lastName="Martin", firstName="Léa", email="lea@example.com", phone="0698765432")


def _all_enabled() -> NotificationSettings:
    return NotificationSettings(
        admin_email=NotificationChannelConfig(
            enabled=True,
            destination="admin@acme.fr",
            subject_template="Nouveau dossier {{ticket}}",
            body_template="Client {{client_phone}} le {{date}}",
        ),
        admin_sms=NotificationChannelConfig(
            enabled=True,
            destination="0611111111",
            body_template="Dossier {{ticket}} reçu.",
        ),
        client_email=NotificationChannelConfig(enabled=True),
        client_sms=NotificationChannelConfig(enabled=True, body_template="Merci. {{company}} / {{ticket}}"),
    )


def _by_channel(outcomes):
    return {o.channel: o for o in outcomes}


class TestBuildContext:
    def test_date_formatted_day_first(self):
        assert CONTEXT["date"] == "14/03/2026"
        assert CONTEXT["ticket"] == "#REQ-123456"


class TestResolveMessage:
    def test_disabled_channel_skipped(self):
        channel = CHANNELS[0]
        config = NotificationChannelConfig(enabled=False, destination="admin@acme.fr")
        assert resolve_message(channel, config, CONTEXT) is None

    def test_empty_destination_skipped(self):
        channel = CHANNELS[0]
        config = NotificationChannelConfig(enabled=True, destination="  ")
        assert resolve_message(channel, config, CONTEXT) is None

    def test_client_channel_without_contact_skipped(self):
        client_email = next(c for c in CHANNELS if c.name == "client_email")
        assert resolve_message(client_email, NotificationChannelConfig(enabled=True), CONTEXT) is None

    def test_default_templates_used_when_empty(self):
        client_email = next(c for c in CHANNELS if c.name == "client_email")
        message = resolve_message(client_email, NotificationChannelConfig(enabled=True), CONTEXT, CONTACT)
        assert message.destination == "lea@example.com"
        assert message.subject == "Confirmation de votre dossier #REQ-123456"
        assert "#REQ-123456" in message.body
        assert message.body.endswith("Acme")

    def test_sms_has_no_subject(self):
        client_sms = next(c for c in CHANNELS if c.name == "client_sms")
        message = resolve_message(client_sms, NotificationChannelConfig(enabled=True), CONTEXT, CONTACT)
        assert message.subject is None
        assert message.destination == "0698765432"


class TestDispatch:
    @pytest.mark.asyncio
    async def test_all_channels_sent(self, email_sender, sms_sender):
        dispatcher = NotificationDispatcher(email_sender, sms_sender, timeout_seconds=5)
        outcomes = await dispatcher.dispatch(_all_enabled(), CONTEXT, CONTACT)

        assert [o.channel for o in outcomes] == ["admin_email", "admin_sms", "client_email", "client_sms"]
        assert all(o.status == "sent" for o in outcomes)
        assert {m["to"] for m in email_sender.sent} == {"admin@acme.fr", "lea@example.com"}
        assert {m["to"] for m in sms_sender.sent} == {"0611111111", "0698765432"}

        admin_mail = next(m for m in email_sender.sent if m["to"] == "admin@acme.fr")
        assert admin_mail["subject"] == "Nouveau dossier #REQ-123456"
        assert admin_mail["body"] == "Client 0612345678 le 14/03/2026"

    @pytest.mark.asyncio
    async def test_sms_failure_does_not_stop_email(self, email_sender, failing_sms_sender):
        dispatcher = NotificationDispatcher(email_sender, failing_sms_sender, timeout_seconds=5)
        outcomes = _by_channel(await dispatcher.dispatch(_all_enabled(), CONTEXT, CONTACT))

        assert outcomes["admin_sms"].status == "failed"
        assert outcomes["client_sms"].status == "failed"
        assert outcomes["admin_email"].status == "sent"
        assert outcomes["client_email"].status == "sent"
        assert len(email_sender.sent) == 2

    @pytest.mark.asyncio
    async def test_missing_sender_fails_only_its_channels(self, email_sender):
        dispatcher = NotificationDispatcher(email_sender, None, timeout_seconds=5)
        outcomes = _by_channel(await dispatcher.dispatch(_all_enabled(), CONTEXT, CONTACT))

        assert outcomes["admin_sms"].status == "failed"
        assert "No SMS sender" in outcomes["admin_sms"].error
        assert outcomes["admin_email"].status == "sent"

    @pytest.mark.asyncio
    async def test_disabled_channels_skipped(self, email_sender, sms_sender):
        dispatcher = NotificationDispatcher(email_sender, sms_sender, timeout_seconds=5)
        outcomes = await dispatcher.dispatch(NotificationSettings(), CONTEXT, CONTACT)

        assert all(o.status == "skipped" for o in outcomes)
        assert email_sender.sent == []
        assert sms_sender.sent == []

    @pytest.mark.asyncio
    async def test_slow_channel_times_out(self, email_sender):
        class SlowSmsSender:
            async def send(self, to, body, sender_id=None):
                await asyncio.sleep(5)

        dispatcher = NotificationDispatcher(email_sender, SlowSmsSender(), timeout_seconds=0.05)
        settings = NotificationSettings(
            admin_sms=NotificationChannelConfig(enabled=True, destination="0611111111"),
            admin_email=NotificationChannelConfig(enabled=True, destination="admin@acme.fr"),
        )
        outcomes = _by_channel(await dispatcher.dispatch(settings, CONTEXT))

        assert outcomes["admin_sms"].status == "failed"
        assert outcomes["admin_sms"].error == "timeout"
        assert outcomes["admin_email"].status == "sent"
