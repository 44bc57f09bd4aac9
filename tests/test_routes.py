from datetime import timedelta

from .conftest import NOW


def create(client, **overrides):
    payload = {
        "name": "Alice",
        "weekly_rent_amount": 100,
        "current_rent_credit_amount": 0,
        "current_rent_paid_to_date": "2026-10-05",
    }
    payload.update(overrides)
    return client.post("/api/tenants", json=payload)


class TestTenantEndpoints:

    def test_create(self, client):
        resp = create(client)
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["id"] is not None
        assert body["name"] == "Alice"
        assert body["creation_date"] == NOW.isoformat()
        assert body["rent_receipts"] == []

    def test_create_requires_name(self, client):
        resp = create(client, name="  ")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "invalid_payload"

    def test_create_rejects_non_string_name(self, client):
        resp = create(client, name=123)
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "invalid_payload"

    def test_create_rejects_malformed_receipts(self, client):
        for receipts in ("x", 5, [1], ["a"]):
            resp = create(client, rent_receipts=receipts)
            assert resp.status_code == 400, receipts
            assert resp.get_json()["error"] == "invalid_state"
        assert client.get("/api/tenants").get_json()["total"] == 0

    def test_create_rejects_sub_cent_rent(self, client):
        resp = create(client, weekly_rent_amount=99.999)
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "invalid_state"

    def test_create_rejects_non_object_body(self, client):
        resp = client.post("/api/tenants", json=[1, 2])
        assert resp.status_code == 400

    def test_create_rejects_negative_rent(self, client):
        resp = create(client, weekly_rent_amount=-1)
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "invalid_state"

    def test_get(self, client):
        tenant_id = create(client).get_json()["id"]
        resp = client.get(f"/api/tenants/{tenant_id}")
        assert resp.status_code == 200
        assert resp.get_json()["weekly_rent_amount"] == 100.0

    def test_get_unknown(self, client):
        resp = client.get("/api/tenants/42")
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "not_found"

    def test_update(self, client, clock):
        tenant_id = create(client).get_json()["id"]
        clock.advance(timedelta(days=1))
        resp = client.put(f"/api/tenants/{tenant_id}", json={"weekly_rent_amount": 120})
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["name"] == "Alice"
        assert body["weekly_rent_amount"] == 120.0
        assert body["current_rent_paid_to_date"] == "2026-10-05"
        assert body["creation_date"] == NOW.isoformat()

    def test_update_rejects_non_string_name(self, client):
        tenant_id = create(client).get_json()["id"]
        resp = client.put(f"/api/tenants/{tenant_id}", json={"name": ["Bob"]})
        assert resp.status_code == 400
        assert client.get(f"/api/tenants/{tenant_id}").get_json()["name"] == "Alice"

    def test_update_cannot_rewind_paid_to_date(self, client):
        tenant_id = create(client).get_json()["id"]
        resp = client.put(f"/api/tenants/{tenant_id}", json={"current_rent_paid_to_date": "2026-09-01"})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "invalid_state"
        body = client.get(f"/api/tenants/{tenant_id}").get_json()
        assert body["current_rent_paid_to_date"] == "2026-10-05"

    def test_update_unknown(self, client):
        assert client.put("/api/tenants/5", json={"name": "X"}).status_code == 404

    def test_list(self, client):
        create(client, name="Alice")
        create(client, name="Bob")
        body = client.get("/api/tenants").get_json()
        assert body["total"] == 2
        assert [t["name"] for t in body["tenants"]] == ["Alice", "Bob"]

    def test_list_recent_payers(self, client):
        recent = create(client, name="Recent").get_json()["id"]
        stale = create(client, name="Stale").get_json()["id"]
        client.post(f"/api/tenants/{recent}/rent-receipts",
                    json={"amount": 10, "creation_date": (NOW - timedelta(hours=1)).isoformat()})
        client.post(f"/api/tenants/{stale}/rent-receipts",
                    json={"amount": 10, "creation_date": (NOW - timedelta(hours=30)).isoformat()})

        body = client.get("/api/tenants?paid_in_last_hours=24").get_json()
        assert [t["name"] for t in body["tenants"]] == ["Recent"]

    def test_list_with_huge_window(self, client):
        tenant_id = create(client).get_json()["id"]
        client.post(f"/api/tenants/{tenant_id}/rent-receipts", json={"amount": 10})
        resp = client.get("/api/tenants?paid_in_last_hours=100000000")
        assert resp.status_code == 200
        assert [t["id"] for t in resp.get_json()["tenants"]] == [tenant_id]

    def test_list_bad_window(self, client):
        resp = client.get("/api/tenants?paid_in_last_hours=soon")
        assert resp.status_code == 400


class TestRentReceiptEndpoints:

    def test_add_receipt(self, client):
        tenant_id = create(client).get_json()["id"]
        resp = client.post(f"/api/tenants/{tenant_id}/rent-receipts", json={"amount": 250})
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["tenant_id"] == tenant_id
        assert body["amount"] == 250.0
        assert body["creation_date"] == NOW.isoformat()

        tenant = client.get(f"/api/tenants/{tenant_id}").get_json()
        assert tenant["current_rent_credit_amount"] == 50.0
        assert tenant["current_rent_paid_to_date"] == "2026-10-19"
        assert [r["id"] for r in tenant["rent_receipts"]] == [body["id"]]

    def test_add_receipt_unknown_tenant(self, client):
        resp = client.post("/api/tenants/77/rent-receipts", json={"amount": 10})
        assert resp.status_code == 404
        assert client.get("/api/tenants").get_json()["total"] == 0

    def test_add_receipt_requires_amount(self, client):
        tenant_id = create(client).get_json()["id"]
        resp = client.post(f"/api/tenants/{tenant_id}/rent-receipts", json={})
        assert resp.status_code == 400

    def test_add_negative_receipt(self, client):
        tenant_id = create(client).get_json()["id"]
        resp = client.post(f"/api/tenants/{tenant_id}/rent-receipts", json={"amount": -5})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "invalid_state"

    def test_add_sub_cent_receipt(self, client):
        tenant_id = create(client).get_json()["id"]
        resp = client.post(f"/api/tenants/{tenant_id}/rent-receipts", json={"amount": 99.999})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "invalid_state"
        tenant = client.get(f"/api/tenants/{tenant_id}").get_json()
        assert tenant["current_rent_credit_amount"] == 0.0
        assert tenant["rent_receipts"] == []

    def test_list_receipts(self, client):
        tenant_id = create(client).get_json()["id"]
        for amount in (10, 20):
            client.post(f"/api/tenants/{tenant_id}/rent-receipts", json={"amount": amount})
        body = client.get(f"/api/tenants/{tenant_id}/rent-receipts").get_json()
        assert body["total"] == 2
        assert [r["amount"] for r in body["rent_receipts"]] == [10.0, 20.0]


class TestHealth:

    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.get_json()["status"] == "ok"
