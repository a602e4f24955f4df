from decimal import Decimal


class TestMetersAPI:

    def _meter(self, client, headers, room_id, starting=100):
        response = client.post(
            "/api/meters",
            json={"room_id": room_id, "meter_number": "M-101", "starting_reading": starting},
            headers=headers,
        )
        assert response.status_code == 201
        return response.json()

    def test_reading_flow(self, client, owner_headers, room):
        meter = self._meter(client, owner_headers, room.id)

        response = client.post(
            f"/api/meters/{meter['id']}/readings",
            json={"reading_value": 150, "reading_date": "2024-07-31"},
            headers=owner_headers,
        )

        assert response.status_code == 201
        assert Decimal(response.json()["units_consumed"]) == Decimal("50")
        assert Decimal(response.json()["bill_amount"]) == Decimal("250.00")

        data = client.get(f"/api/meters/{meter['id']}", headers=owner_headers).json()
        assert Decimal(data["current_reading"]) == Decimal("150")
        assert data["reading_count"] == 1

    def test_lower_reading_rejected_and_not_stored(self, client, owner_headers, room):
        meter = self._meter(client, owner_headers, room.id)
        client.post(
            f"/api/meters/{meter['id']}/readings",
            json={"reading_value": 150, "reading_date": "2024-07-31"},
            headers=owner_headers,
        )

        response = client.post(
            f"/api/meters/{meter['id']}/readings",
            json={"reading_value": 140, "reading_date": "2024-08-31"},
            headers=owner_headers,
        )

        assert response.status_code == 400
        history = client.get(f"/api/meters/{meter['id']}/readings", headers=owner_headers).json()
        assert len(history["readings"]) == 1

    def test_zero_reading_rejected(self, client, owner_headers, room):
        meter = self._meter(client, owner_headers, room.id, starting=0)

        response = client.post(
            f"/api/meters/{meter['id']}/readings",
            json={"reading_value": 0, "reading_date": "2024-07-31"},
            headers=owner_headers,
        )

        assert response.status_code == 400

    def test_second_meter_for_room_conflicts(self, client, owner_headers, room):
        self._meter(client, owner_headers, room.id)

        response = client.post(
            "/api/meters", json={"room_id": room.id, "meter_number": "M-2"}, headers=owner_headers
        )

        assert response.status_code == 409

    def test_bill_preview(self, client, owner_headers):
        response = client.post("/api/meters/bill-preview", json={"units": 250}, headers=owner_headers)

        assert Decimal(response.json()["bill_amount"]) == Decimal("1550.00")
