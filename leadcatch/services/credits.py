"""Credit service — SMS credit balance, purchases and per-message deduction."""

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from leadcatch.models.credit import Credit
from leadcatch.models.credit_transaction import CreditTransaction

logger = logging.getLogger(__name__)


class InsufficientCreditsError(Exception):
    """Raised when a tenant lacks credits for the requested operation."""

    def __init__(self, required: float, available: float) -> None:
        self.required = required
        self.available = available
        super().__init__(f"Insufficient credits: required {required}, available {available}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def get_or_create_credit(db: Session, tenant_id: uuid.UUID) -> Credit:
    """Return the Credit row for a tenant, creating one with zero balance if absent."""
    credit = db.execute(select(Credit).where(Credit.tenant_id == tenant_id)).scalar_one_or_none()

    if credit is None:
        credit = Credit(tenant_id=tenant_id, balance=0.0, total_purchased=0.0, total_consumed=0.0)
        db.add(credit)
        db.flush()

    return credit


# ---------------------------------------------------------------------------
# Balance queries
# ---------------------------------------------------------------------------


def get_balance(db: Session, tenant_id: uuid.UUID) -> Credit:
    return get_or_create_credit(db, tenant_id)


def has_credits(db: Session, tenant_id: uuid.UUID, required: float) -> bool:
    return get_or_create_credit(db, tenant_id).balance >= required


def get_transaction_history(
    db: Session,
    tenant_id: uuid.UUID,
    page: int = 1,
    page_size: int = 20,
) -> tuple[list[CreditTransaction], int]:
    """Return paginated transaction history for a tenant, newest first."""
    base = select(CreditTransaction).where(CreditTransaction.tenant_id == tenant_id)
    count_query = (
        select(func.count()).select_from(CreditTransaction).where(CreditTransaction.tenant_id == tenant_id)
    )

    total = db.execute(count_query).scalar_one()
    offset = (page - 1) * page_size
    transactions = (
        db.execute(base.order_by(CreditTransaction.created_at.desc()).offset(offset).limit(page_size))
        .scalars()
        .all()
    )

    return list(transactions), total


# ---------------------------------------------------------------------------
# Credit mutations
# ---------------------------------------------------------------------------


def purchase_credits(
    db: Session,
    tenant_id: uuid.UUID,
    amount: float,
    amount_paid: float = 0.0,
    reference: str | None = None,
    description: str | None = None,
) -> CreditTransaction:
    """Add credits to a tenant's balance (manual top-up or welcome grant)."""
    credit = get_or_create_credit(db, tenant_id)

    credit.balance += amount
    credit.total_purchased += amount

    transaction = CreditTransaction(
        tenant_id=tenant_id,
        credit_id=credit.id,
        amount=amount,
        amount_paid=amount_paid,
        type="purchase",
        reference=reference,
        description=description or f"Credit purchase: {amount}",
    )
    db.add(transaction)
    db.commit()
    db.refresh(credit)
    db.refresh(transaction)

    logger.info("Purchased %.2f credits for tenant %s (new balance: %.2f)", amount, tenant_id, credit.balance)
    return transaction


def consume_credits(
    db: Session,
    tenant_id: uuid.UUID,
    amount: float,
    reference: str | None = None,
    description: str | None = None,
) -> CreditTransaction:
    """Deduct credits from a tenant's balance.

    Called once per qualification SMS that was actually sent.

    Raises:
        InsufficientCreditsError: If the balance does not cover ``amount``.
    """
    credit = get_or_create_credit(db, tenant_id)
    if credit.balance < amount:
        raise InsufficientCreditsError(required=amount, available=credit.balance)

    credit.balance -= amount
    credit.total_consumed += amount

    transaction = CreditTransaction(
        tenant_id=tenant_id,
        credit_id=credit.id,
        amount=-amount,
        type="consume",
        reference=reference,
        description=description or f"Credit consumed: {amount}",
    )
    db.add(transaction)
    db.commit()
    db.refresh(transaction)

    return transaction


def adjust_credits(
    db: Session,
    tenant_id: uuid.UUID,
    amount: float,
    description: str,
) -> CreditTransaction:
    """Correct a tenant's balance by ``amount`` (positive or negative) without a payment."""
    credit = get_or_create_credit(db, tenant_id)

    credit.balance += amount

    transaction = CreditTransaction(
        tenant_id=tenant_id,
        credit_id=credit.id,
        amount=amount,
        type="adjustment",
        description=description,
    )
    db.add(transaction)
    db.commit()
    db.refresh(transaction)

    logger.info("Adjusted credits of tenant %s by %.2f (%s)", tenant_id, amount, description)
    return transaction
