from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

import main
from main import app


class TestComplaintsAPI:

    def test_tenant_raises_complaint_for_own_room(self, client, tenant_headers, tenant, room):
        response = client.post(
            "/api/complaints",
            json={"title": "No hot water", "description": "Geyser broken", "priority": "high", "tenant_id": 999},
            headers=tenant_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["tenant_id"] == tenant.id
        assert data["room_number"] == "101"
        assert data["status"] == "open"

    def test_status_moves_forward_only(self, client, owner_headers, tenant):
        created = client.post(
            "/api/complaints",
            json={"title": "Fan noise", "description": "Ceiling fan", "tenant_id": tenant.id},
            headers=owner_headers,
        ).json()

        resolved = client.patch(
            f"/api/complaints/{created['id']}/status", json={"status": "resolved"}, headers=owner_headers
        )
        assert resolved.status_code == 200
        assert resolved.json()["resolved_at"] is not None
        resolved_at = datetime.fromisoformat(resolved.json()["resolved_at"])
        assert resolved_at.tzinfo is None
        assert abs(datetime.now(timezone.utc).replace(tzinfo=None) - resolved_at) < timedelta(minutes=1)

        reopened = client.patch(
            f"/api/complaints/{created['id']}/status", json={"status": "open"}, headers=owner_headers
        )
        assert reopened.status_code == 400

    def test_tenant_cannot_change_status(self, client, owner_headers, tenant_headers, tenant):
        created = client.post(
            "/api/complaints",
            json={"title": "Fan noise", "description": "Ceiling fan", "tenant_id": tenant.id},
            headers=owner_headers,
        ).json()

        response = client.patch(
            f"/api/complaints/{created['id']}/status", json={"status": "resolved"}, headers=tenant_headers
        )

        assert response.status_code == 403

    def test_list_filters(self, client, owner_headers, tenant):
        client.post(
            "/api/complaints",
            json={"title": "Wifi down", "description": "Router", "priority": "low"},
            headers=owner_headers,
        )
        client.post(
            "/api/complaints",
            json={"title": "Leak", "description": "Bathroom", "priority": "high", "tenant_id": tenant.id},
            headers=owner_headers,
        )

        high = client.get("/api/complaints", params={"priority": "high"}, headers=owner_headers).json()
        assert [c["title"] for c in high] == ["Leak"]

        found = client.get("/api/complaints", params={"search": "rahul"}, headers=owner_headers).json()
        assert [c["title"] for c in found] == ["Leak"]


class TestDashboardAPI:

    def test_dashboard(self, client, owner_headers, tenant):
        data = client.get("/api/dashboard", headers=owner_headers).json()

        assert data["total_rooms"] == 1
        assert data["total_tenants"] == 1
        assert data["recent_tenants"][0]["full_name"] == "Rahul Sharma"

    def test_trend_length(self, client, owner_headers, tenant):
        data = client.get("/api/dashboard/trend", params={"months": 3}, headers=owner_headers).json()

        assert data["months"] == 3
        assert len(data["series"]) == 3

    def test_health(self, client):
        assert client.get("/api/health").status_code == 200


class TestStartup:

    def test_lifespan_creates_tables(self, monkeypatch):
        calls = []
        monkeypatch.setattr(main, "init_db", lambda: calls.append("init_db"))

        with TestClient(app):
            assert calls == ["init_db"]
