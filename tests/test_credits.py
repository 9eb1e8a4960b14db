"""Tests for the SMS credit system — balance, top-ups, consumption, adjustments and history."""

import uuid

import pytest

from leadcatch.models.credit_transaction import CreditTransaction
from leadcatch.services.credits import (
    InsufficientCreditsError,
    adjust_credits,
    consume_credits,
    get_balance,
    get_or_create_credit,
    get_transaction_history,
    has_credits,
    purchase_credits,
)

NONEXISTENT_UUID = str(uuid.uuid4())


# ---------------------------------------------------------------------------
# Service layer
# ---------------------------------------------------------------------------


class TestCreditService:
    def test_new_tenant_gets_welcome_credits(self, db, tenant_id):
        credit = get_balance(db, tenant_id)
        assert credit.balance == 10.0
        assert credit.total_purchased == 10.0

        transactions, total = get_transaction_history(db, tenant_id)
        assert total == 1
        assert transactions[0].reference == "START-BONUS"
        assert transactions[0].type == "purchase"

    def test_get_or_create_is_idempotent(self, db, tenant_id):
        first = get_or_create_credit(db, tenant_id)
        second = get_or_create_credit(db, tenant_id)
        assert first.id == second.id

    def test_purchase_adds_balance(self, db, tenant_id):
        transaction = purchase_credits(db, tenant_id, 50, amount_paid=25.0, reference="INV-2026-001")
        assert transaction.amount == 50
        assert transaction.amount_paid == 25.0
        assert get_balance(db, tenant_id).balance == 60.0

    def test_consume_deducts_balance(self, db, tenant_id):
        transaction = consume_credits(db, tenant_id, 1.0, reference="CA123")
        assert transaction.amount == -1.0
        assert transaction.type == "consume"

        credit = get_balance(db, tenant_id)
        assert credit.balance == 9.0
        assert credit.total_consumed == 1.0

    def test_consume_more_than_balance(self, db, tenant_id):
        with pytest.raises(InsufficientCreditsError) as exc_info:
            consume_credits(db, tenant_id, 11.0)
        assert exc_info.value.required == 11.0
        assert exc_info.value.available == 10.0
        assert get_balance(db, tenant_id).balance == 10.0

    def test_has_credits(self, db, tenant_id):
        assert has_credits(db, tenant_id, 10.0)
        assert not has_credits(db, tenant_id, 10.5)

    def test_negative_adjustment(self, db, tenant_id):
        transaction = adjust_credits(db, tenant_id, -4.0, "Duplicate top-up")
        assert transaction.type == "adjustment"
        credit = get_balance(db, tenant_id)
        assert credit.balance == 6.0
        assert credit.total_purchased == 10.0

    def test_history_pagination(self, db, tenant_id):
        for i in range(4):
            consume_credits(db, tenant_id, 1.0, reference=f"CA{i}")

        page, total = get_transaction_history(db, tenant_id, page=2, page_size=2)
        assert total == 5
        assert len(page) == 2
        assert db.query(CreditTransaction).filter_by(tenant_id=tenant_id, type="consume").count() == 4


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------


class TestCreditEndpoints:
    def test_balance(self, client, tenant_id):
        resp = client.get(f"/api/v1/tenants/{tenant_id}/credits")
        assert resp.status_code == 200
        data = resp.json()
        assert data["tenant_id"] == str(tenant_id)
        assert data["balance"] == 10.0
        assert data["total_consumed"] == 0.0

    def test_balance_unknown_tenant(self, client):
        resp = client.get(f"/api/v1/tenants/{NONEXISTENT_UUID}/credits")
        assert resp.status_code == 404

    def test_top_up(self, client, tenant_id):
        resp = client.post(
            f"/api/v1/tenants/{tenant_id}/credits",
            json={"amount": 100, "amount_paid": 49.0, "reference": "INV-42"},
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data["type"] == "purchase"
        assert data["reference"] == "INV-42"
        assert data["amount_paid"] == 49.0

        balance = client.get(f"/api/v1/tenants/{tenant_id}/credits").json()
        assert balance["balance"] == 110.0

    def test_top_up_rejects_non_positive_amount(self, client, tenant_id):
        resp = client.post(f"/api/v1/tenants/{tenant_id}/credits", json={"amount": 0})
        assert resp.status_code == 422

    def test_adjustment(self, client, tenant_id):
        resp = client.post(
            f"/api/v1/tenants/{tenant_id}/credits/adjustments",
            json={"amount": -2, "description": "Correction"},
        )
        assert resp.status_code == 201
        assert resp.json()["type"] == "adjustment"
        assert client.get(f"/api/v1/tenants/{tenant_id}/credits").json()["balance"] == 8.0

    def test_adjustment_requires_description(self, client, tenant_id):
        resp = client.post(f"/api/v1/tenants/{tenant_id}/credits/adjustments", json={"amount": 5})
        assert resp.status_code == 422

    def test_history(self, client, tenant_id):
        client.post(f"/api/v1/tenants/{tenant_id}/credits", json={"amount": 5})
        resp = client.get(f"/api/v1/tenants/{tenant_id}/credits/history?page_size=1")
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 2
        assert data["page_size"] == 1
        assert len(data["items"]) == 1

    def test_history_unknown_tenant(self, client):
        resp = client.get(f"/api/v1/tenants/{NONEXISTENT_UUID}/credits/history")
        assert resp.status_code == 404
