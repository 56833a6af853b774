"""
Tests for the plan limit gate
=============================

The repository is patched so the gate can be exercised without a database,
and so tests can assert which lookups the gate performed.
"""

from unittest.mock import AsyncMock, patch

import pytest

from app.models import Plan, ResourceKind, User
from app.services.limit_service import (
    FREE_PLAN_LIMITS,
    DecisionReason,
    LimitService,
)
from app.utils.envelopes import api_limit_reached

REPO = "app.services.limit_service.SubscriptionRepository"


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def principal():
    return User(id=7, username="kate", password_hash="x", is_super_admin=False)


@pytest.fixture
def admin():
    return User(id=1, username="admin", password_hash="x", is_super_admin=True)


def make_plan(name="starter", appointments=500, locations=5, services=25):
    return Plan(
        name=name,
        display_name=name.title(),
        max_appointments=appointments,
        max_locations=locations,
        max_services=services,
    )


def patch_repo(plan=None, count=0):
    """Patch plan resolution and counting; returns the two mocks."""
    get_plan = patch(f"{REPO}.get_active_plan", new=AsyncMock(return_value=plan))
    count_rows = patch(f"{REPO}.count_user_resources", new=AsyncMock(return_value=count))
    return get_plan, count_rows


# =============================================================================
# TESTS
# =============================================================================

class TestSuperAdminBypass:
    """Super admins are never limited and never cause a lookup"""

    @pytest.mark.parametrize("resource", list(ResourceKind))
    async def test_allows_any_resource_without_lookups(self, admin, resource):
        get_plan, count_rows = patch_repo(plan=make_plan(locations=0), count=10_000)
        with get_plan as plan_mock, count_rows as count_mock:
            decision = await LimitService.check_limit(None, resource, admin)

        assert decision.allowed
        assert decision.reason is DecisionReason.SUPER_ADMIN
        plan_mock.assert_not_awaited()
        count_mock.assert_not_awaited()


class TestUnlimitedPlans:

    async def test_unlimited_cap_skips_count(self, principal):
        get_plan, count_rows = patch_repo(plan=make_plan("professional", -1, -1, -1), count=999_999)
        with get_plan, count_rows as count_mock:
            decision = await LimitService.check_limit(None, ResourceKind.APPOINTMENTS, principal)

        assert decision.allowed
        assert decision.reason is DecisionReason.UNLIMITED
        assert decision.limit == -1
        count_mock.assert_not_awaited()

    async def test_only_the_uncapped_resource_skips_count(self, principal):
        plan = make_plan("custom", appointments=-1, locations=3, services=-1)
        get_plan, count_rows = patch_repo(plan=plan, count=1)
        with get_plan, count_rows as count_mock:
            decision = await LimitService.check_limit(None, ResourceKind.LOCATIONS, principal)

        assert decision.allowed
        assert decision.reason is DecisionReason.WITHIN_LIMIT
        count_mock.assert_awaited_once_with(None, ResourceKind.LOCATIONS, principal.id)


class TestCapEnforcement:

    @pytest.mark.parametrize("count,allowed", [(0, True), (4, True), (5, False), (9, False)])
    async def test_allows_below_cap_and_denies_at_or_above(self, principal, count, allowed):
        get_plan, count_rows = patch_repo(plan=make_plan(locations=5), count=count)
        with get_plan, count_rows:
            decision = await LimitService.check_limit(None, ResourceKind.LOCATIONS, principal)

        assert decision.allowed is allowed
        assert decision.limit == 5
        assert decision.current == count
        assert decision.plan_name == "starter"

    async def test_no_active_subscription_uses_free_plan(self, principal):
        get_plan, count_rows = patch_repo(plan=None, count=2)
        with get_plan, count_rows:
            decision = await LimitService.check_limit(None, ResourceKind.LOCATIONS, principal)

        assert not decision.allowed
        assert decision.reason is DecisionReason.LIMIT_REACHED
        assert decision.limit == FREE_PLAN_LIMITS.max_locations == 2
        assert decision.plan_name == "free"
        assert decision.message == "Your free plan allows 2 locations. Please upgrade to add more."

    async def test_accepts_resource_name_as_string(self, principal):
        get_plan, count_rows = patch_repo(plan=None, count=10)
        with get_plan, count_rows:
            decision = await LimitService.check_limit(None, "services", principal)

        assert decision.resource is ResourceKind.SERVICES
        assert not decision.allowed

    async def test_zero_cap_denies_first_row(self, principal):
        get_plan, count_rows = patch_repo(plan=make_plan(services=0), count=0)
        with get_plan, count_rows:
            decision = await LimitService.check_limit(None, ResourceKind.SERVICES, principal)

        assert not decision.allowed
        assert decision.usage == {"current": 0, "max": 0}

    @pytest.mark.parametrize("increment,allowed", [(1, True), (2, True), (3, False)])
    async def test_batch_increment_counts_every_new_row(self, principal, increment, allowed):
        get_plan, count_rows = patch_repo(plan=None, count=48)
        with get_plan, count_rows:
            decision = await LimitService.check_limit(
                None, ResourceKind.APPOINTMENTS, principal, increment=increment
            )

        assert decision.allowed is allowed


class TestLookupErrors:

    async def test_fails_open_by_default(self, principal):
        with patch(f"{REPO}.get_active_plan", new=AsyncMock(side_effect=RuntimeError("db down"))):
            decision = await LimitService.check_limit(None, ResourceKind.LOCATIONS, principal)

        assert decision.allowed
        assert decision.reason is DecisionReason.LOOKUP_ERROR

    async def test_count_failure_fails_open(self, principal):
        with patch(f"{REPO}.get_active_plan", new=AsyncMock(return_value=None)), patch(
            f"{REPO}.count_user_resources", new=AsyncMock(side_effect=RuntimeError("timeout"))
        ):
            decision = await LimitService.check_limit(None, ResourceKind.APPOINTMENTS, principal)

        assert decision.allowed
        assert decision.reason is DecisionReason.LOOKUP_ERROR

    async def test_per_call_deny_policy(self, principal):
        with patch(f"{REPO}.get_active_plan", new=AsyncMock(side_effect=RuntimeError("db down"))):
            decision = await LimitService.check_limit(
                None, ResourceKind.LOCATIONS, principal, on_lookup_error="deny"
            )

        assert not decision.allowed
        assert decision.reason is DecisionReason.LOOKUP_ERROR

    async def test_configured_deny_policy(self, principal, monkeypatch):
        monkeypatch.setattr("app.services.limit_service.settings.LIMIT_LOOKUP_ERROR_POLICY", "deny")
        with patch(f"{REPO}.get_active_plan", new=AsyncMock(side_effect=RuntimeError("db down"))):
            decision = await LimitService.check_limit(None, ResourceKind.LOCATIONS, principal)

        assert not decision.allowed

    async def test_lookup_error_is_logged(self, principal, caplog):
        with patch(f"{REPO}.get_active_plan", new=AsyncMock(side_effect=RuntimeError("db down"))):
            await LimitService.check_limit(None, ResourceKind.LOCATIONS, principal)

        assert any("Error checking locations limit" in r.getMessage() for r in caplog.records)


class TestLimitReachedBody:

    async def test_body_shape(self, principal):
        get_plan, count_rows = patch_repo(plan=None, count=2)
        with get_plan, count_rows:
            decision = await LimitService.check_limit(None, ResourceKind.LOCATIONS, principal)

        assert api_limit_reached(decision) == {
            "error": "Location limit reached",
            "message": "Your free plan allows 2 locations. Please upgrade to add more.",
            "limit": 2,
            "current": 2,
            "upgradeRequired": True,
        }
