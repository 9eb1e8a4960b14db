"""Tests for tenant onboarding, settings and dashboard stats."""

import uuid

BASE_URL = "/api/v1/tenants"


def _create(client, **overrides):
    payload = {"name": "Chauffage Martin & Fils", "contact_email": "martin@example.fr", **overrides}
    resp = client.post(BASE_URL, json=payload)
    assert resp.status_code == 201
    return resp.json()


class TestCreateTenant:
    def test_defaults(self, client):
        data = _create(client)
        assert data["sms_sender_id"] == "CHAUFFAGEMA"
        assert data["auto_sms_enabled"] is True
        assert data["cooldown_seconds"] == 180
        assert "{{form_link}}" in data["sms_message"]
        assert data["schedule"] == {
            "enabled": False,
            "days": [1, 2, 3, 4, 5],
            "start_time": "09:00",
            "end_time": "18:00",
        }

    def test_creates_default_form(self, client):
        tenant_id = _create(client)["id"]
        form = client.get(f"{BASE_URL}/{tenant_id}/form").json()
        assert form["page_title"] == "Qualification de demande"
        admin_email = form["notifications"]["admin_email"]
        assert admin_email["enabled"] is True
        assert admin_email["destination"] == "martin@example.fr"
        assert form["marketing_optin"]["enabled"] is True

    def test_grants_welcome_credits(self, client):
        tenant_id = _create(client)["id"]
        assert client.get(f"{BASE_URL}/{tenant_id}/credits").json()["balance"] == 10.0

    def test_sender_id_is_cleaned(self, client):
        data = _create(client, sms_sender_id="ab-12 cd")
        assert data["sms_sender_id"] == "AB12CD"

    def test_rejects_invalid_schedule(self, client):
        resp = client.post(
            BASE_URL,
            json={
                "name": "X",
                "contact_email": "x@example.fr",
                "schedule": {"enabled": True, "days": [7]},
            },
        )
        assert resp.status_code == 422

    def test_rejects_missing_name(self, client):
        resp = client.post(BASE_URL, json={"contact_email": "x@example.fr"})
        assert resp.status_code == 422

    def test_profile_defaults(self, client):
        data = _create(client)
        assert data["plan"] == "basic"
        assert data["siret"] is None
        assert data["notes"] is None

    def test_company_profile(self, client):
        data = _create(
            client,
            plan="pro",
            contact_name="Paul Martin",
            phone="01 45 00 00 00",
            address="12 rue des Lilas, 75020 Paris",
            siret="732 829 320 00074",
            vat_number="FR44732829320",
            notes="Client depuis 2019",
        )
        assert data["plan"] == "pro"
        assert data["contact_name"] == "Paul Martin"
        assert data["phone"] == "01 45 00 00 00"
        assert data["address"] == "12 rue des Lilas, 75020 Paris"
        assert data["siret"] == "73282932000074"
        assert data["vat_number"] == "FR44732829320"
        assert data["notes"] == "Client depuis 2019"

    def test_rejects_unknown_plan(self, client):
        resp = client.post(BASE_URL, json={"name": "X", "contact_email": "x@example.fr", "plan": "gold"})
        assert resp.status_code == 422

    def test_rejects_malformed_siret(self, client):
        resp = client.post(BASE_URL, json={"name": "X", "contact_email": "x@example.fr", "siret": "1234"})
        assert resp.status_code == 422


class TestUpdateTenant:
    def test_patch_settings(self, client, tenant_id):
        resp = client.patch(
            f"{BASE_URL}/{tenant_id}",
            json={
                "auto_sms_enabled": False,
                "cooldown_seconds": 600,
                "schedule": {"enabled": True, "days": [5, 1, 1], "start_time": "08:30", "end_time": "12:00"},
            },
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["auto_sms_enabled"] is False
        assert data["cooldown_seconds"] == 600
        assert data["schedule"]["days"] == [1, 5]
        assert data["name"] == "Plomberie Dupont"

    def test_empty_sender_id_falls_back(self, client, tenant_id):
        resp = client.patch(f"{BASE_URL}/{tenant_id}", json={"sms_sender_id": "--"})
        assert resp.json()["sms_sender_id"] == "INFO"

    def test_rejects_invalid_time(self, client, tenant_id):
        resp = client.patch(
            f"{BASE_URL}/{tenant_id}",
            json={"schedule": {"enabled": True, "start_time": "25:00"}},
        )
        assert resp.status_code == 422

    def test_patch_profile(self, client, tenant_id):
        resp = client.patch(f"{BASE_URL}/{tenant_id}", json={"plan": "pro", "notes": "Rappeler en mars"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["plan"] == "pro"
        assert data["notes"] == "Rappeler en mars"
        assert data["contact_email"] == "contact@dupont.fr"

    def test_unknown_tenant(self, client):
        resp = client.patch(f"{BASE_URL}/{uuid.uuid4()}", json={"name": "X"})
        assert resp.status_code == 404


class TestTenantStats:
    def test_fresh_tenant(self, client, tenant_id):
        resp = client.get(f"{BASE_URL}/{tenant_id}/stats")
        assert resp.status_code == 200
        assert resp.json() == {
            "sms_sent": 0,
            "sms_filtered": 0,
            "sms_errors": 0,
            "submissions_total": 0,
            "submissions_new": 0,
            "credit_balance": 10.0,
        }

    def test_counts_calls_and_submissions(self, client, tenant_id, sms_sender):
        client.post("/api/v1/calls/missed", json={"tenant_id": str(tenant_id), "caller": "0612345678"})
        client.post("/api/v1/calls/missed", json={"tenant_id": str(tenant_id), "caller": "0145000000"})
        client.post(
            f"/api/v1/public/forms/{tenant_id}/submissions",
            json={
                "values": {
                    "contact_1": {
                        "lastName": "Martin",
                        "firstName": "Léa",
                        "email": "lea@example.com",
                        "phone": "0612345678",
                        "address": "1 rue de Paris",
                    },
                    "b2": "Fuite",
                    "legal_1": True,
                }
            },
        )

        stats = client.get(f"{BASE_URL}/{tenant_id}/stats").json()
        assert stats["sms_sent"] == 1
        assert stats["sms_filtered"] == 1
        assert stats["submissions_total"] == 1
        assert stats["submissions_new"] == 1
        assert stats["credit_balance"] == 9.0


class TestTenantDirectory:
    def _entry(self, client, tenant_id):
        resp = client.get(BASE_URL)
        assert resp.status_code == 200
        return next(entry for entry in resp.json() if entry["tenant_id"] == str(tenant_id))

    def test_lists_every_tenant(self, client, tenant_id):
        other_id = _create(client, plan="pro")["id"]
        names = {entry["tenant_id"]: entry["name"] for entry in client.get(BASE_URL).json()}
        assert names == {str(tenant_id): "Plomberie Dupont", other_id: "Chauffage Martin & Fils"}

    def test_fresh_tenant(self, client, tenant_id):
        entry = self._entry(client, tenant_id)
        assert entry["plan"] == "basic"
        assert entry["contact_email"] == "contact@dupont.fr"
        assert entry["auto_sms_enabled"] is True
        assert entry["credit_balance"] == 10.0
        assert entry["sms_sent"] == 0
        assert entry["sms_filtered"] == 0
        assert entry["sms_errors"] == 0
        assert entry["last_activity"] is None

    def test_counts_missed_calls_per_tenant(self, client, tenant_id, sms_sender):
        other_id = _create(client)["id"]
        client.post("/api/v1/calls/missed", json={"tenant_id": str(tenant_id), "caller": "0612345678"})
        client.post("/api/v1/calls/missed", json={"tenant_id": str(tenant_id), "caller": "0145000000"})

        entry = self._entry(client, tenant_id)
        assert entry["sms_sent"] == 1
        assert entry["sms_filtered"] == 1
        assert entry["credit_balance"] == 9.0
        assert entry["last_activity"] is not None

        other = self._entry(client, other_id)
        assert other["sms_sent"] == 0
        assert other["last_activity"] is None
