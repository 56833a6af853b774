"""Subscription and plan management routes."""

from typing import Optional

from fastapi import APIRouter, Query, status

from app.api.deps import DB, CurrentUser, SuperAdmin
from app.schemas.subscriptions import (
    AssignSubscriptionRequest,
    PlanCreateRequest,
    PlanUpdateRequest,
)
from app.services.subscription_service import SubscriptionService
from app.utils.envelopes import api_success

router = APIRouter(tags=["subscriptions"])


@router.get("/subscriptions/plans", response_model=dict)
async def list_plans(db: DB):
    """List active plans for the pricing page. No authentication required."""
    plans = await SubscriptionService.list_plans(db, active_only=True)
    return api_success([p.model_dump() for p in plans])


@router.get("/subscriptions/my-subscription", response_model=dict)
async def get_my_subscription(current_user: CurrentUser, db: DB):
    """Get current user's subscription, or the free plan when there is none."""
    subscription = await SubscriptionService.get_my_subscription(db, current_user.id)
    return api_success(subscription.model_dump(mode="json"))


@router.get("/subscriptions/usage", response_model=dict)
async def get_usage(current_user: CurrentUser, db: DB):
    """Plan caps next to the current number of appointments, locations and services."""
    usage = await SubscriptionService.get_usage(db, current_user.id)
    return api_success(usage.model_dump())


@router.get("/subscriptions/check-limits", response_model=dict)
async def check_limits(
    current_user: CurrentUser,
    db: DB,
    type_: Optional[str] = Query(None, alias="type"),
):
    result = await SubscriptionService.check_limits(db, current_user.id, type_)
    return api_success(result.model_dump(by_alias=True))


# ---- Super admin ----


@router.get("/subscriptions/admin/plans", response_model=dict)
async def admin_list_plans(_admin: SuperAdmin, db: DB):
    plans = await SubscriptionService.list_plans(db, active_only=False)
    return api_success([p.model_dump() for p in plans])


@router.post("/subscriptions/admin/plans", response_model=dict, status_code=status.HTTP_201_CREATED)
async def admin_create_plan(payload: PlanCreateRequest, _admin: SuperAdmin, db: DB):
    plan = await SubscriptionService.create_plan(db, payload)
    return api_success(SubscriptionService.plan_to_response(plan).model_dump())


@router.put("/subscriptions/admin/plans/{plan_id}", response_model=dict)
async def admin_update_plan(plan_id: int, payload: PlanUpdateRequest, _admin: SuperAdmin, db: DB):
    plan = await SubscriptionService.update_plan(db, plan_id, payload)
    return api_success(SubscriptionService.plan_to_response(plan).model_dump())


@router.delete("/subscriptions/admin/plans/{plan_id}", response_model=dict)
async def admin_delete_plan(plan_id: int, _admin: SuperAdmin, db: DB):
    await SubscriptionService.delete_plan(db, plan_id)
    return api_success({"message": "Plan deleted successfully"})


@router.get("/subscriptions/admin/subscriptions", response_model=dict)
async def admin_list_subscriptions(_admin: SuperAdmin, db: DB):
    rows = await SubscriptionService.list_subscriptions(db)
    return api_success([row.model_dump(mode="json") for row in rows])


@router.post("/subscriptions/admin/subscriptions", response_model=dict)
async def admin_assign_subscription(payload: AssignSubscriptionRequest, _admin: SuperAdmin, db: DB):
    """Put a user on a plan; any existing subscription is replaced."""
    await SubscriptionService.assign_subscription(db, payload.user_id, payload.plan_id)
    return api_success({"message": "Subscription assigned successfully"})


@router.delete("/subscriptions/admin/subscriptions/{user_id}", response_model=dict)
async def admin_cancel_subscription(user_id: int, _admin: SuperAdmin, db: DB):
    await SubscriptionService.cancel_subscription(db, user_id)
    return api_success({"message": "Subscription cancelled successfully"})
