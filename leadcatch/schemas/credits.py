import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

CreditTransactionType = Literal["purchase", "consume", "adjustment"]


# ---------------------------------------------------------------------------
# Balance
# ---------------------------------------------------------------------------


class CreditBalanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tenant_id: uuid.UUID
    balance: float
    total_purchased: float
    total_consumed: float


# ---------------------------------------------------------------------------
# Transaction history
# ---------------------------------------------------------------------------


class CreditTransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    tenant_id: uuid.UUID
    amount: float
    amount_paid: float
    type: CreditTransactionType
    reference: str | None
    description: str | None
    created_at: datetime


class CreditHistoryResponse(BaseModel):
    items: list[CreditTransactionResponse]
    total: int
    page: int
    page_size: int


# ---------------------------------------------------------------------------
# Manual top-up and adjustment (back office)
# ---------------------------------------------------------------------------


class CreditPurchaseRequest(BaseModel):
    amount: float = Field(..., gt=0)
    amount_paid: float = Field(0.0, ge=0)
    reference: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=500)


class CreditAdjustmentRequest(BaseModel):
    amount: float
    description: str = Field(..., min_length=1, max_length=500)
