"""
API tests for locations, services and appointments
==================================================
"""

from unittest.mock import AsyncMock, patch

import pytest


@pytest.fixture
async def headers(user, auth_headers):
    return auth_headers(user)


@pytest.fixture
async def catalog(client, headers):
    """Two services and one location owned by the test user"""
    for service in (
        {"service_name": "Cut & Blow Dry", "type": "Hair", "price": "25.00"},
        {"service_name": "Manicure", "type": "Nails", "price": "18.00"},
    ):
        response = await client.post("/api/services", json=service, headers=headers)
        assert response.status_code == 201
    response = await client.post(
        "/api/locations",
        json={"location_name": "Oak House", "distance": 4.5},
        headers=headers,
    )
    assert response.status_code == 201
    return headers


class TestAuthRequired:

    @pytest.mark.parametrize("path", ["/api/locations", "/api/services", "/api/appointments", "/api/financial"])
    async def test_requires_bearer_token(self, client, path):
        response = await client.get(path)

        assert response.status_code in (401, 403)

    async def test_rejects_bad_token(self, client):
        response = await client.get("/api/locations", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401


class TestLocations:

    async def test_crud(self, client, headers):
        created = await client.post(
            "/api/locations",
            json={"location_name": "Oak House", "city_town": "Leeds", "distance": 3},
            headers=headers,
        )
        location_id = created.json()["data"]["id"]

        fetched = await client.get("/api/locations/Oak House", headers=headers)
        assert fetched.json()["data"]["city_town"] == "Leeds"

        updated = await client.put(
            f"/api/locations/{location_id}", json={"notes": "Ring bell twice"}, headers=headers
        )
        assert updated.json()["data"]["notes"] == "Ring bell twice"
        assert updated.json()["data"]["city_town"] == "Leeds"

        listed = await client.get("/api/locations", headers=headers)
        assert [l["location_name"] for l in listed.json()["data"]] == ["Oak House"]

        assert (await client.delete(f"/api/locations/{location_id}", headers=headers)).status_code == 200
        missing = await client.get("/api/locations/Oak House", headers=headers)
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "NOT_FOUND"

    async def test_duplicate_name_is_rejected(self, client, headers):
        await client.post("/api/locations", json={"location_name": "Oak House"}, headers=headers)

        response = await client.post("/api/locations", json={"location_name": "Oak House"}, headers=headers)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Location name already exists"

    async def test_rename_to_existing_name_is_rejected(self, client, headers):
        await client.post("/api/locations", json={"location_name": "Oak House"}, headers=headers)
        created = await client.post("/api/locations", json={"location_name": "Elm Court"}, headers=headers)

        response = await client.put(
            f"/api/locations/{created.json()['data']['id']}", json={"location_name": "Oak House"}, headers=headers
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "CONFLICT"

    async def test_rename_race_hits_unique_constraint(self, client, headers):
        await client.post("/api/locations", json={"location_name": "Oak House"}, headers=headers)
        created = await client.post("/api/locations", json={"location_name": "Elm Court"}, headers=headers)

        # Name check passes, as if the other row was inserted after it ran
        with patch(
            "app.services.location_service.LocationRepository.get_by_name", new=AsyncMock(return_value=None)
        ):
            response = await client.put(
                f"/api/locations/{created.json()['data']['id']}",
                json={"location_name": "Oak House"},
                headers=headers,
            )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Location name already exists"
        listed = await client.get("/api/locations", headers=headers)
        assert [l["location_name"] for l in listed.json()["data"]] == ["Elm Court", "Oak House"]

    async def test_cannot_touch_another_users_location(self, client, headers, make_user, auth_headers):
        created = await client.post("/api/locations", json={"location_name": "Oak House"}, headers=headers)
        other = auth_headers(await make_user("mallory"))

        response = await client.delete(f"/api/locations/{created.json()['data']['id']}", headers=other)

        assert response.status_code == 404


class TestServices:

    async def test_listed_by_type_then_name(self, client, catalog):
        await client.post(
            "/api/services", json={"service_name": "Beard Trim", "type": "Hair", "price": 5}, headers=catalog
        )

        response = await client.get("/api/services", headers=catalog)

        assert [(s["type"], s["service_name"]) for s in response.json()["data"]] == [
            ("Hair", "Beard Trim"),
            ("Hair", "Cut & Blow Dry"),
            ("Nails", "Manicure"),
        ]

    async def test_update_price(self, client, catalog):
        service = (await client.get("/api/services/Manicure", headers=catalog)).json()["data"]

        response = await client.put(f"/api/services/{service['id']}", json={"price": "19.50"}, headers=catalog)

        assert response.json()["data"]["price"] == 19.5

    async def test_rename_race_hits_unique_constraint(self, client, catalog):
        service = (await client.get("/api/services/Manicure", headers=catalog)).json()["data"]

        with patch(
            "app.services.catalog_service.ServiceRepository.get_by_name", new=AsyncMock(return_value=None)
        ):
            response = await client.put(
                f"/api/services/{service['id']}", json={"service_name": "Cut & Blow Dry"}, headers=catalog
            )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Service name already exists"

    async def test_negative_price_is_rejected(self, client, headers):
        response = await client.post(
            "/api/services", json={"service_name": "Odd", "type": "Hair", "price": -1}, headers=headers
        )

        assert response.status_code == 422


class TestAppointments:

    async def test_single_appointment_uses_catalog_price(self, client, catalog):
        response = await client.post(
            "/api/appointments",
            json={"client_name": "Mrs Smith", "service": "Manicure", "date": "2024-05-01", "location": "Oak House"},
            headers=catalog,
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["type"] == "Nails"
        assert data["price"] == 18.0
        assert data["paid"] is False

    async def test_unknown_service_is_rejected(self, client, catalog):
        response = await client.post(
            "/api/appointments",
            json={"client_name": "Mrs Smith", "service": "Perm", "date": "2024-05-01", "location": "Oak House"},
            headers=catalog,
        )

        assert response.status_code == 400

    async def test_batch_puts_distance_on_first_only(self, client, catalog):
        response = await client.post(
            "/api/appointments/batch",
            json={
                "location": "Oak House",
                "date": "2024-05-01",
                "appointments": [
                    {"client_name": "Mrs Smith", "service": "Cut & Blow Dry"},
                    {"client_name": "Mr Jones", "service": "Manicure"},
                ],
            },
            headers=catalog,
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["message"] == "Successfully created 2 appointments"
        assert [a["distance"] for a in data["appointments"]] == [4.5, None]
        assert [a["price"] for a in data["appointments"]] == [25.0, 18.0]

    async def test_batch_with_unknown_service_writes_nothing(self, client, catalog):
        response = await client.post(
            "/api/appointments/batch",
            json={
                "location": "Oak House",
                "date": "2024-05-01",
                "appointments": [
                    {"client_name": "Mrs Smith", "service": "Cut & Blow Dry"},
                    {"client_name": "Mr Jones", "service": "Perm"},
                ],
            },
            headers=catalog,
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == 'Service "Perm" not found'
        listed = await client.get("/api/appointments", headers=catalog)
        assert listed.json()["data"] == []

    async def test_pay_and_unpay(self, client, catalog):
        created = await client.post(
            "/api/appointments",
            json={"client_name": "Mrs Smith", "service": "Manicure", "date": "2024-05-01", "location": "Oak House"},
            headers=catalog,
        )
        appointment_id = created.json()["data"]["id"]

        paid = await client.patch(f"/api/appointments/{appointment_id}/pay", headers=catalog)
        assert paid.json()["data"]["paid"] is True
        assert paid.json()["data"]["payment_date"] is not None

        unpaid = await client.patch(f"/api/appointments/{appointment_id}/unpay", headers=catalog)
        assert unpaid.json()["data"]["paid"] is False
        assert unpaid.json()["data"]["payment_date"] is None

    async def test_listed_newest_first(self, client, catalog):
        for day in ("2024-01-01", "2024-03-01", "2024-02-01"):
            await client.post(
                "/api/appointments",
                json={"client_name": "C", "service": "Manicure", "date": day, "location": "Oak House"},
                headers=catalog,
            )

        response = await client.get("/api/appointments", headers=catalog)

        assert [a["date"] for a in response.json()["data"]] == ["2024-03-01", "2024-02-01", "2024-01-01"]

    async def test_update_and_delete(self, client, catalog):
        created = await client.post(
            "/api/appointments",
            json={"client_name": "C", "service": "Manicure", "date": "2024-05-01", "location": "Oak House"},
            headers=catalog,
        )
        appointment_id = created.json()["data"]["id"]

        updated = await client.put(
            f"/api/appointments/{appointment_id}", json={"client_name": "Mrs C"}, headers=catalog
        )
        assert updated.json()["data"]["client_name"] == "Mrs C"

        assert (await client.delete(f"/api/appointments/{appointment_id}", headers=catalog)).status_code == 200
        assert (await client.get(f"/api/appointments/{appointment_id}", headers=catalog)).status_code == 404
