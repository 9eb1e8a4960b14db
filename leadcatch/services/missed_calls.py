"""Missed-call handler — decides whether a missed caller gets the qualification SMS.

Filters run in order and the first match wins:
    is_landline            caller is not a French mobile number
    system_disabled        tenant switched auto SMS off
    outside_schedule_day   schedule enabled and today is not an active day
    outside_schedule_time  schedule enabled and now is outside opening hours
    cooldown               an SMS already went to this number recently
    insufficient_credits   no credit left for one SMS

A call that passes every filter is texted ``tenant.sms_message`` and one
credit is consumed. Every call ends up as exactly one SmsLog row.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.orm import Session

from leadcatch.core.config import settings
from leadcatch.models.sms_log import SmsLog
from leadcatch.models.submission import Submission
from leadcatch.models.tenant import Tenant
from leadcatch.schemas.tenants import ScheduleConfig
from leadcatch.services import templates
from leadcatch.services.credits import InsufficientCreditsError, consume_credits, has_credits
from leadcatch.services.messaging import BaseSmsSender, NotificationError
from leadcatch.services.phones import is_mobile_number, normalize_phone
from leadcatch.services.store import FormDefinitionNotFound, SqlAlchemyStore, TenantNotFound

logger = logging.getLogger(__name__)

# Provider call statuses that mean nobody picked up
MISSED_CALL_STATUSES = frozenset({"no-answer", "busy", "canceled"})

REASON_SENT = "mobile_ok"


def form_link(tenant_id: uuid.UUID) -> str:
    return f"{settings.PUBLIC_FORM_BASE_URL.rstrip('/')}/f/{tenant_id}"


def schedule_reason(schedule: ScheduleConfig, now: datetime) -> str | None:
    """Return the filter reason when ``now`` (tenant local time) is outside the schedule."""
    if not schedule.enabled:
        return None
    # Python counts Monday as 0, schedules count Sunday as 0
    day = (now.weekday() + 1) % 7
    if day not in schedule.days:
        return "outside_schedule_day"
    current = now.strftime("%H:%M")
    if current < schedule.start_time or current > schedule.end_time:
        return "outside_schedule_time"
    return None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _in_cooldown(db: Session, tenant: Tenant, phone: str, now_utc: datetime) -> bool:
    if tenant.cooldown_seconds <= 0:
        return False
    since = now_utc - timedelta(seconds=tenant.cooldown_seconds)
    recent = db.execute(
        select(SmsLog.id)
        .where(
            SmsLog.tenant_id == tenant.id,
            SmsLog.phone == phone,
            SmsLog.status == "sent",
            SmsLog.created_at >= since,
        )
        .limit(1)
    ).first()
    return recent is not None


def filter_reason(db: Session, tenant: Tenant, phone: str, now_utc: datetime) -> str | None:
    """Return the first matching filter reason, or None when the SMS may go out."""
    if not is_mobile_number(phone):
        return "is_landline"
    if not tenant.auto_sms_enabled:
        return "system_disabled"

    local_now = now_utc.replace(tzinfo=timezone.utc).astimezone(ZoneInfo(settings.DEFAULT_TIMEZONE))
    reason = schedule_reason(ScheduleConfig.model_validate(tenant.schedule or {}), local_now)
    if reason:
        return reason

    if _in_cooldown(db, tenant, phone, now_utc):
        return "cooldown"
    if not has_credits(db, tenant.id, settings.SMS_COST_PER_MESSAGE):
        return "insufficient_credits"
    return None


def render_sms(db: Session, tenant: Tenant) -> str:
    """Tenant SMS template with ``{{company}}`` and ``{{form_link}}`` filled in.

    The link is empty when the tenant's form is missing or disabled.
    """
    link = ""
    try:
        if SqlAlchemyStore(db).get_form_definition(tenant.id).enabled:
            link = form_link(tenant.id)
    except FormDefinitionNotFound:
        logger.warning("Tenant %s has no form definition; sending SMS without link", tenant.id)
    return templates.render(tenant.sms_message, {"company": tenant.name, "form_link": link})


def _log(
    db: Session,
    tenant_id: uuid.UUID,
    phone: str,
    status: str,
    reason: str,
    call_id: str | None,
    created_at: datetime,
    message: str = "",
    provider_message_id: str | None = None,
) -> SmsLog:
    entry = SmsLog(
        tenant_id=tenant_id,
        phone=phone,
        message=message,
        status=status,
        reason=reason,
        call_id=call_id,
        provider_message_id=provider_message_id,
        created_at=created_at,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


async def handle_missed_call(
    db: Session,
    tenant_id: uuid.UUID,
    caller: str,
    call_id: str | None,
    sms_sender: BaseSmsSender | None,
    now: datetime | None = None,
) -> SmsLog:
    """Filter one missed call, text the caller when allowed, and log the outcome.

    Args:
        now: Naive UTC time of the call; defaults to the current time.

    Raises:
        TenantNotFound: If the tenant does not exist.
    """
    tenant = db.get(Tenant, tenant_id)
    if tenant is None:
        raise TenantNotFound(tenant_id)

    now_utc = now or _utcnow()
    phone = normalize_phone(caller)

    reason = filter_reason(db, tenant, phone, now_utc)
    if reason:
        logger.info("Missed call %s from %s filtered for tenant %s: %s", call_id, phone, tenant_id, reason)
        return _log(db, tenant_id, phone, "filtered", reason, call_id, now_utc)

    message = render_sms(db, tenant)
    if sms_sender is None:
        logger.error("Missed call %s: no SMS sender configured", call_id)
        return _log(db, tenant_id, phone, "error", "sms_not_configured", call_id, now_utc, message)

    try:
        result = await sms_sender.send(phone, message, sender_id=tenant.sms_sender_id)
    except NotificationError as exc:
        logger.error("Missed call %s: SMS to %s failed: %s", call_id, phone, exc)
        return _log(db, tenant_id, phone, "error", "send_failed", call_id, now_utc, message)

    try:
        consume_credits(
            db,
            tenant_id,
            settings.SMS_COST_PER_MESSAGE,
            reference=call_id,
            description=f"Qualification SMS to {phone}",
        )
    except InsufficientCreditsError as exc:
        # Another call took the last credit between the check and the send
        logger.warning("Missed call %s: SMS sent to %s but no credit left to consume: %s", call_id, phone, exc)
    logger.info("Missed call %s: qualification SMS sent to %s", call_id, phone)
    return _log(
        db,
        tenant_id,
        phone,
        "sent",
        REASON_SENT,
        call_id,
        now_utc,
        message,
        provider_message_id=result.message_id,
    )


def list_sms_logs(db: Session, tenant_id: uuid.UUID, limit: int = 100) -> list[tuple[SmsLog, bool]]:
    """Newest logs first, each paired with whether the caller later submitted the form."""
    logs = (
        db.execute(
            select(SmsLog).where(SmsLog.tenant_id == tenant_id).order_by(SmsLog.created_at.desc()).limit(limit)
        )
        .scalars()
        .all()
    )
    phones = {log.phone for log in logs}
    submitted = set()
    if phones:
        submitted = set(
            db.execute(
                select(Submission.phone).where(Submission.tenant_id == tenant_id, Submission.phone.in_(phones))
            )
            .scalars()
            .all()
        )
    return [(log, log.phone in submitted) for log in logs]
