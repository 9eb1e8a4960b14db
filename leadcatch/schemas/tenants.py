import re
import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

_TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

TenantPlan = Literal["basic", "pro"]


class ScheduleConfig(BaseModel):
    """Days (0 = Sunday ... 6 = Saturday) and hours during which missed calls get an SMS."""

    enabled: bool = False
    days: list[int] = Field(default_factory=lambda: [1, 2, 3, 4, 5])
    start_time: str = Field("09:00", pattern=_TIME_PATTERN)
    end_time: str = Field("18:00", pattern=_TIME_PATTERN)

    @field_validator("days")
    @classmethod
    def _valid_days(cls, days: list[int]) -> list[int]:
        for day in days:
            if day < 0 or day > 6:
                raise ValueError(f"Invalid day {day}, expected 0 (Sunday) to 6 (Saturday)")
        return sorted(set(days))


def clean_sender_id(value: str) -> str:
    """SMS sender ids are alphanumeric, upper-case, at most 11 characters."""
    return re.sub(r"[^a-zA-Z0-9]", "", value).upper()[:11]


class TenantProfile(BaseModel):
    """Company details kept for the back office."""

    contact_name: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=64)
    address: str | None = Field(None, max_length=1000)
    siret: str | None = Field(None, max_length=32)
    vat_number: str | None = Field(None, max_length=32)
    notes: str | None = Field(None, max_length=5000)

    @field_validator("siret")
    @classmethod
    def _valid_siret(cls, value: str | None) -> str | None:
        if value is None:
            return None
        siret = re.sub(r"\s", "", value)
        if not siret:
            return None
        if not re.fullmatch(r"\d{14}", siret):
            raise ValueError("SIRET must be 14 digits")
        return siret


PROFILE_FIELDS = tuple(TenantProfile.model_fields)


class TenantCreate(TenantProfile):
    name: str = Field(..., min_length=1, max_length=255)
    contact_email: str = Field(..., min_length=5, max_length=255)
    plan: TenantPlan = "basic"
    sms_sender_id: str | None = Field(None, max_length=64)
    sms_message: str | None = Field(None, max_length=1000)
    cooldown_seconds: int = Field(180, ge=0)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)


class TenantUpdate(TenantProfile):
    name: str | None = Field(None, min_length=1, max_length=255)
    contact_email: str | None = Field(None, min_length=5, max_length=255)
    plan: TenantPlan | None = None
    sms_sender_id: str | None = Field(None, max_length=64)
    auto_sms_enabled: bool | None = None
    sms_message: str | None = Field(None, max_length=1000)
    cooldown_seconds: int | None = Field(None, ge=0)
    schedule: ScheduleConfig | None = None


class TenantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    contact_email: str
    plan: TenantPlan
    contact_name: str | None = None
    phone: str | None = None
    address: str | None = None
    siret: str | None = None
    vat_number: str | None = None
    notes: str | None = None
    sms_sender_id: str
    auto_sms_enabled: bool
    sms_message: str
    cooldown_seconds: int
    schedule: ScheduleConfig
    created_at: datetime


class TenantStats(BaseModel):
    sms_sent: int
    sms_filtered: int
    sms_errors: int
    submissions_total: int
    submissions_new: int
    credit_balance: float


class TenantDirectoryEntry(BaseModel):
    """One line of the back-office company list."""

    tenant_id: uuid.UUID
    name: str
    contact_email: str
    plan: TenantPlan
    auto_sms_enabled: bool
    credit_balance: float
    sms_sent: int
    sms_filtered: int
    sms_errors: int
    last_activity: datetime | None
    created_at: datetime
