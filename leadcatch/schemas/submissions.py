import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from leadcatch.schemas.forms import AnswerValue

SubmissionStatus = Literal["new", "pending", "done", "archived"]
TriageBucket = Literal["to_process", "all", "archived"]


class Answer(BaseModel):
    """A respondent's value for one block, with the block label frozen at submission time."""

    block_id: str
    label: str
    value: AnswerValue


class SubmissionRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    tenant_id: uuid.UUID
    ticket_number: str
    phone: str
    created_at: datetime
    answers: list[Answer] = Field(default_factory=list)
    marketing_optin: bool = False
    status: SubmissionStatus = "new"


# ---------------------------------------------------------------------------
# Public form
# ---------------------------------------------------------------------------


class SubmissionCreate(BaseModel):
    """Respondent values keyed by block id, as filled in the public form."""

    values: dict[str, AnswerValue] = Field(default_factory=dict)
    marketing_optin: bool = False


class SubmissionReceiptResponse(BaseModel):
    ticket_number: str


# ---------------------------------------------------------------------------
# Triage
# ---------------------------------------------------------------------------


class SubmissionStatusUpdate(BaseModel):
    status: SubmissionStatus


class SubmissionListResponse(BaseModel):
    items: list[SubmissionRecord]
    total: int
    bucket: TriageBucket
    new_count: int
