import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SmsLogStatus = Literal["sent", "filtered", "error"]


class MissedCallEvent(BaseModel):
    """A missed call reported by the telephony provider or a PBX integration."""

    tenant_id: uuid.UUID
    caller: str = Field(..., min_length=1, max_length=64)
    call_id: str | None = Field(None, max_length=128)


class MissedCallResult(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    status: SmsLogStatus
    reason: str
    phone: str
    message: str


class SmsLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    phone: str
    message: str
    status: SmsLogStatus
    reason: str
    call_id: str | None
    created_at: datetime
    has_submission: bool = False
