from datetime import date
from decimal import Decimal

from models import RentRecord


def july_payment(tenant_id, **overrides):
    body = {
        "tenant_id": tenant_id,
        "payment_date": "2024-07-03",
        "payment_month": "2024-07-15",
        "rent_amount": 8000,
        "payment_method": "upi",
    }
    body.update(overrides)
    return body


class TestPaymentsAPI:

    def test_record_payment(self, client, owner_headers, tenant):
        response = client.post("/api/payments", json=july_payment(tenant.id, other_charges=250), headers=owner_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["payment_month"] == "2024-07-01"
        assert data["tenant_name"] == "Rahul Sharma"
        assert Decimal(data["total_amount"]) == Decimal("8250")

    def test_second_payment_same_month_conflicts(self, client, owner_headers, tenant):
        client.post("/api/payments", json=july_payment(tenant.id), headers=owner_headers)

        response = client.post(
            "/api/payments", json=july_payment(tenant.id, payment_month="2024-07-01"), headers=owner_headers
        )

        assert response.status_code == 409

    def test_checked_out_tenant_cannot_pay(self, client, owner_headers, tenant):
        client.post(f"/api/tenants/{tenant.id}/checkout", json={"check_out_date": "2024-06-30"}, headers=owner_headers)

        response = client.post("/api/payments", json=july_payment(tenant.id), headers=owner_headers)

        assert response.status_code == 400

    def test_list_by_month(self, client, owner_headers, tenant):
        client.post("/api/payments", json=july_payment(tenant.id), headers=owner_headers)
        client.post(
            "/api/payments", json=july_payment(tenant.id, payment_month="2024-08-01"), headers=owner_headers
        )

        data = client.get("/api/payments", params={"month": "2024-08"}, headers=owner_headers).json()
        assert [p["payment_month"] for p in data] == ["2024-08-01"]

        response = client.get("/api/payments", params={"month": "2024-13"}, headers=owner_headers)
        assert response.status_code == 400

    def test_tenant_sees_only_own_payments(self, client, owner_headers, tenant_headers, tenant):
        client.post("/api/payments", json=july_payment(tenant.id), headers=owner_headers)

        data = client.get("/api/payments", headers=tenant_headers).json()

        assert len(data) == 1
        assert client.post("/api/payments", json=july_payment(tenant.id), headers=tenant_headers).status_code == 403


class TestRentAPI:

    def test_month_view_reflects_payment(self, client, owner_headers, tenant):
        before = client.get("/api/rent/2024/7", headers=owner_headers).json()
        assert before["summary"]["collection_rate"] == 0.0
        assert before["due_date"] == "2024-07-05"

        client.post("/api/payments", json=july_payment(tenant.id), headers=owner_headers)

        after = client.get("/api/rent/2024/7", headers=owner_headers).json()
        assert after["records"][0]["status"] == "paid"
        assert after["summary"]["collection_rate"] == 100.0
        assert Decimal(after["summary"]["collected"]) == Decimal("8000")

    def test_status_filter_keeps_summary(self, client, owner_headers, tenant):
        data = client.get("/api/rent/2024/7", params={"status": "paid"}, headers=owner_headers).json()

        assert data["records"] == []
        assert Decimal(data["summary"]["total_rent"]) == Decimal("8000")

    def test_invalid_month(self, client, owner_headers):
        response = client.get("/api/rent/2024/13", headers=owner_headers)

        assert response.status_code == 400

    def test_tenant_view(self, client, tenant_headers, tenant):
        data = client.get("/api/rent/2024/7", headers=tenant_headers).json()

        assert [r["tenant_id"] for r in data["records"]] == [tenant.id]

    def test_sync_writes_records_and_reports_drift(self, client, owner_headers, owner, room, tenant, db):
        db.add(RentRecord(
            tenant_id=tenant.id,
            room_id=room.id,
            owner_id=owner.id,
            amount=Decimal("8000"),
            due_date=date(2024, 7, 5),
            status="paid",
        ))
        db.commit()

        data = client.post("/api/rent/2024/7/sync", headers=owner_headers).json()

        assert data["updated"] == 1
        assert data["created"] == 0
        assert data["discrepancies"][0]["stored_status"] == "paid"
        assert data["discrepancies"][0]["live_status"] in ("pending", "overdue")

    def test_sync_matches_row_on_another_due_date(self, client, owner_headers, owner, room, tenant, db):
        db.add(RentRecord(
            tenant_id=tenant.id,
            room_id=room.id,
            owner_id=owner.id,
            amount=Decimal("8000"),
            due_date=date(2024, 7, 1),
            status="paid",
        ))
        db.commit()

        data = client.post("/api/rent/2024/7/sync", headers=owner_headers).json()

        assert data["created"] == 0
        assert data["updated"] == 1
        assert data["discrepancies"][0]["stored_due_date"] == "2024-07-01"
        assert data["discrepancies"][0]["stored_status"] == "paid"
        db.expire_all()
        rows = db.query(RentRecord).filter(RentRecord.tenant_id == tenant.id).all()
        assert [(r.due_date, r.status) for r in rows] == [(date(2024, 7, 5), "overdue")]

    def test_sync_collapses_duplicate_rows_for_month(self, client, owner_headers, owner, room, tenant, db):
        client.post("/api/payments", json=july_payment(tenant.id), headers=owner_headers)
        for due in (date(2024, 7, 1), date(2024, 7, 5)):
            db.add(RentRecord(
                tenant_id=tenant.id,
                room_id=room.id,
                owner_id=owner.id,
                amount=Decimal("8000"),
                due_date=due,
                status="paid",
            ))
        db.commit()

        data = client.post("/api/rent/2024/7/sync", headers=owner_headers).json()

        assert data["removed"] == 1
        assert [d["stored_due_date"] for d in data["discrepancies"]] == ["2024-07-01"]
        db.expire_all()
        rows = db.query(RentRecord).filter(RentRecord.tenant_id == tenant.id).all()
        assert [(r.due_date, r.status) for r in rows] == [(date(2024, 7, 5), "paid")]
