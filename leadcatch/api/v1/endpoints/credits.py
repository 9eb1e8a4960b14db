"""Credit management API — SMS credit balance, history and manual top-ups."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from leadcatch.core.database import get_db
from leadcatch.models.tenant import Tenant
from leadcatch.schemas.credits import (
    CreditAdjustmentRequest,
    CreditBalanceResponse,
    CreditHistoryResponse,
    CreditPurchaseRequest,
    CreditTransactionResponse,
)
from leadcatch.services.credits import (
    adjust_credits,
    get_balance,
    get_transaction_history,
    purchase_credits,
)

router = APIRouter()


def _ensure_tenant(tenant_id: uuid.UUID, db: Session) -> None:
    if db.get(Tenant, tenant_id) is None:
        raise HTTPException(status_code=404, detail="Tenant not found")


# ---------------------------------------------------------------------------
# Balance
# ---------------------------------------------------------------------------


@router.get("/{tenant_id}/credits", response_model=CreditBalanceResponse)
def get_credit_balance(tenant_id: uuid.UUID, db: Session = Depends(get_db)):
    """Get the SMS credit balance of a tenant."""
    _ensure_tenant(tenant_id, db)
    credit = get_balance(db, tenant_id)
    return CreditBalanceResponse(
        tenant_id=credit.tenant_id,
        balance=credit.balance,
        total_purchased=credit.total_purchased,
        total_consumed=credit.total_consumed,
    )


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


@router.get("/{tenant_id}/credits/history", response_model=CreditHistoryResponse)
def get_credit_history(
    tenant_id: uuid.UUID,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Get paginated credit transaction history for a tenant."""
    _ensure_tenant(tenant_id, db)
    transactions, total = get_transaction_history(db, tenant_id, page, page_size)
    return CreditHistoryResponse(
        items=transactions,
        total=total,
        page=page,
        page_size=page_size,
    )


# ---------------------------------------------------------------------------
# Top-up and adjustment (back office)
# ---------------------------------------------------------------------------


@router.post("/{tenant_id}/credits", response_model=CreditTransactionResponse, status_code=201)
def purchase_credits_endpoint(
    tenant_id: uuid.UUID,
    payload: CreditPurchaseRequest,
    db: Session = Depends(get_db),
):
    """Record a manual top-up with the amount paid and the invoice reference."""
    _ensure_tenant(tenant_id, db)
    return purchase_credits(
        db,
        tenant_id,
        payload.amount,
        amount_paid=payload.amount_paid,
        reference=payload.reference,
        description=payload.description,
    )


@router.post("/{tenant_id}/credits/adjustments", response_model=CreditTransactionResponse, status_code=201)
def adjust_credits_endpoint(
    tenant_id: uuid.UUID,
    payload: CreditAdjustmentRequest,
    db: Session = Depends(get_db),
):
    _ensure_tenant(tenant_id, db)
    return adjust_credits(db, tenant_id, payload.amount, payload.description)
