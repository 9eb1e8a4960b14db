"""Missed-call API — entry points that trigger the qualification SMS."""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from leadcatch.core.database import get_db
from leadcatch.core.deps import get_optional_sms_sender
from leadcatch.schemas.calls import MissedCallEvent, MissedCallResult
from leadcatch.services.messaging import BaseSmsSender
from leadcatch.services.missed_calls import MISSED_CALL_STATUSES, handle_missed_call
from leadcatch.services.store import TenantNotFound

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/missed", response_model=MissedCallResult)
async def report_missed_call(
    payload: MissedCallEvent,
    db: Session = Depends(get_db),
    sms_sender: BaseSmsSender | None = Depends(get_optional_sms_sender),
):
    """Report a missed call from a PBX or call-forwarding integration."""
    try:
        return await handle_missed_call(db, payload.tenant_id, payload.caller, payload.call_id, sms_sender)
    except TenantNotFound:
        raise HTTPException(status_code=404, detail="Tenant not found")


@router.post("/twilio/{tenant_id}")
async def twilio_status_callback(
    tenant_id: uuid.UUID,
    request: Request,
    db: Session = Depends(get_db),
    sms_sender: BaseSmsSender | None = Depends(get_optional_sms_sender),
):
    """Twilio call status callback. Only unanswered calls are handled.

    Must return 200 to Twilio; unknown tenants and answered calls are ignored.
    """
    form_dict = dict(await request.form())

    call_sid = form_dict.get("CallSid", "")
    caller = form_dict.get("From", "")
    call_status = form_dict.get("CallStatus", "")

    logger.info("Call status received: CallSid=%s Status=%s", call_sid, call_status)

    if call_status not in MISSED_CALL_STATUSES:
        return {"status": "ignored", "reason": f"call status {call_status or 'missing'}"}
    if not caller:
        return {"status": "ignored", "reason": "no caller"}

    try:
        log = await handle_missed_call(db, tenant_id, caller, call_sid or None, sms_sender)
    except TenantNotFound:
        logger.warning("Call status for unknown tenant %s", tenant_id)
        return {"status": "ignored", "reason": "unknown tenant"}
    return {"status": log.status, "reason": log.reason}
