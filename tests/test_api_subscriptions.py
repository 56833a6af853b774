"""
API tests for plans, subscriptions and usage
============================================
"""

import pytest

from app.models import SubscriptionStatus


class TestPublicPlans:

    async def test_active_plans_in_sort_order(self, client, plans, db_session):
        plans["starter"].is_active = False
        await db_session.commit()

        response = await client.get("/api/subscriptions/plans")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()["data"]] == ["free", "professional"]
        assert response.json()["data"][0]["features"] == ["Free feature"]


class TestMySubscription:

    async def test_no_subscription_returns_catalog_free_plan(self, client, user, plans, auth_headers):
        response = await client.get("/api/subscriptions/my-subscription", headers=auth_headers(user))

        data = response.json()["data"]
        assert data["plan_name"] == "free"
        assert data["status"] == "active"
        assert data["max_locations"] == 2

    async def test_empty_catalog_returns_built_in_free_plan(self, client, user, auth_headers):
        response = await client.get("/api/subscriptions/my-subscription", headers=auth_headers(user))

        data = response.json()["data"]
        assert (data["plan_name"], data["max_appointments"], data["max_locations"], data["max_services"]) == (
            "free", 50, 2, 10,
        )

    async def test_existing_subscription_with_plan(self, client, user, plans, subscribe, auth_headers):
        await subscribe(user, plans["starter"], status=SubscriptionStatus.PAST_DUE)

        response = await client.get("/api/subscriptions/my-subscription", headers=auth_headers(user))

        data = response.json()["data"]
        assert data["plan_name"] == "starter"
        assert data["status"] == "past_due"
        assert data["price_monthly"] == 3.99


class TestUsageAndCheckLimits:

    async def test_usage_counts_rows(self, client, user, plans, auth_headers):
        headers = auth_headers(user)
        await client.post("/api/locations", json={"location_name": "Oak House"}, headers=headers)
        await client.post(
            "/api/services", json={"service_name": "Trim", "type": "Hair", "price": 10}, headers=headers
        )

        response = await client.get("/api/subscriptions/usage", headers=headers)

        data = response.json()["data"]
        assert data["plan"]["name"] == "free"
        assert data["usage"] == {"appointments": 0, "locations": 1, "services": 1}

    async def test_check_limits_capped(self, client, user, auth_headers):
        headers = auth_headers(user)
        await client.post("/api/locations", json={"location_name": "Oak House"}, headers=headers)

        response = await client.get("/api/subscriptions/check-limits", params={"type": "location"}, headers=headers)

        assert response.json()["data"] == {
            "type": "location",
            "current": 1,
            "max": 2,
            "remaining": 1,
            "canAdd": True,
            "isUnlimited": False,
            "percentUsed": 50,
        }

    async def test_check_limits_unlimited(self, client, user, plans, subscribe, auth_headers):
        await subscribe(user, plans["professional"])

        response = await client.get(
            "/api/subscriptions/check-limits", params={"type": "appointment"}, headers=auth_headers(user)
        )

        data = response.json()["data"]
        assert data["isUnlimited"] is True
        assert data["canAdd"] is True
        assert data["remaining"] == -1
        assert data["percentUsed"] == 0

    @pytest.mark.parametrize("params", [{}, {"type": "invoice"}])
    async def test_check_limits_rejects_unknown_type(self, client, user, auth_headers, params):
        response = await client.get("/api/subscriptions/check-limits", params=params, headers=auth_headers(user))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestAdminPlans:

    async def test_requires_super_admin(self, client, user, auth_headers):
        response = await client.get("/api/subscriptions/admin/plans", headers=auth_headers(user))

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Super admin access required"

    async def test_create_update_delete(self, client, super_admin, auth_headers):
        headers = auth_headers(super_admin)

        created = await client.post(
            "/api/subscriptions/admin/plans",
            json={"name": "salon", "display_name": "Salon", "max_locations": 20, "features": ["Team accounts"]},
            headers=headers,
        )
        assert created.status_code == 201
        plan = created.json()["data"]
        assert plan["max_appointments"] == -1
        assert plan["features"] == ["Team accounts"]

        duplicate = await client.post(
            "/api/subscriptions/admin/plans", json={"name": "salon", "display_name": "Again"}, headers=headers
        )
        assert duplicate.status_code == 400
        assert duplicate.json()["error"]["message"] == "Plan name already exists"

        updated = await client.put(
            f"/api/subscriptions/admin/plans/{plan['id']}", json={"max_services": 40}, headers=headers
        )
        assert updated.json()["data"]["max_services"] == 40
        assert updated.json()["data"]["max_locations"] == 20

        deleted = await client.delete(f"/api/subscriptions/admin/plans/{plan['id']}", headers=headers)
        assert deleted.status_code == 200
        missing = await client.delete(f"/api/subscriptions/admin/plans/{plan['id']}", headers=headers)
        assert missing.status_code == 404

    async def test_plan_in_use_cannot_be_deleted(self, client, super_admin, user, plans, subscribe, auth_headers):
        await subscribe(user, plans["starter"])

        response = await client.delete(
            f"/api/subscriptions/admin/plans/{plans['starter'].id}", headers=auth_headers(super_admin)
        )

        assert response.status_code == 400


class TestAdminSubscriptions:

    async def test_assign_then_cancel(self, client, super_admin, user, plans, auth_headers):
        admin_headers = auth_headers(super_admin)

        assigned = await client.post(
            "/api/subscriptions/admin/subscriptions",
            json={"user_id": user.id, "plan_id": plans["professional"].id},
            headers=admin_headers,
        )
        assert assigned.status_code == 200

        mine = await client.get("/api/subscriptions/my-subscription", headers=auth_headers(user))
        assert mine.json()["data"]["plan_name"] == "professional"
        assert mine.json()["data"]["current_period_end"] is not None

        listed = await client.get("/api/subscriptions/admin/subscriptions", headers=admin_headers)
        [row] = listed.json()["data"]
        assert (row["username"], row["plan_name"], row["status"]) == ("kate", "professional", "active")

        cancelled = await client.delete(f"/api/subscriptions/admin/subscriptions/{user.id}", headers=admin_headers)
        assert cancelled.status_code == 200

        check = await client.get(
            "/api/subscriptions/check-limits", params={"type": "location"}, headers=auth_headers(user)
        )
        assert check.json()["data"]["max"] == 2

    async def test_reassign_replaces_plan(self, client, super_admin, user, plans, subscribe, auth_headers):
        await subscribe(user, plans["starter"], status=SubscriptionStatus.CANCELLED)

        await client.post(
            "/api/subscriptions/admin/subscriptions",
            json={"user_id": user.id, "plan_id": plans["starter"].id},
            headers=auth_headers(super_admin),
        )

        usage = await client.get("/api/subscriptions/usage", headers=auth_headers(user))
        assert usage.json()["data"]["plan"]["name"] == "starter"

    async def test_assign_unknown_user(self, client, super_admin, plans, auth_headers):
        response = await client.post(
            "/api/subscriptions/admin/subscriptions",
            json={"user_id": 9999, "plan_id": plans["free"].id},
            headers=auth_headers(super_admin),
        )

        assert response.status_code == 404

    async def test_cancel_without_subscription(self, client, super_admin, user, auth_headers):
        response = await client.delete(
            f"/api/subscriptions/admin/subscriptions/{user.id}", headers=auth_headers(super_admin)
        )

        assert response.status_code == 404
