"""Service layer for subscription business logic.

This module contains the business rules for plans and subscriptions.
It orchestrates repository calls and transforms data into API-ready formats.

Key Concepts:
- Plan: a tier with caps on appointments, locations and services (-1 = unlimited)
- Subscription: links a user to a plan; only status 'active' grants the plan
- Free Plan Fallback: users without an active subscription get the free plan.
  The catalog's "free" row is used for display when present; the caps the
  limit gate enforces come from LimitService.get_user_limits.

Architecture:
- Repository: Fetches raw data from database
- Service: Applies business rules, calculates usage, formats responses
- Route: Orchestrates service calls and returns HTTP responses
"""

import calendar
import json
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.subscription_repo import SubscriptionRepository
from app.models.models import User
from app.models.plan import UNLIMITED, Plan
from app.models.subscription import Subscription
from app.models.subscription_enums import ResourceKind, SubscriptionStatus
from app.schemas.subscriptions import (
    AdminSubscriptionRow,
    LimitCheckResponse,
    MySubscription,
    PlanCreateRequest,
    PlanResponse,
    PlanUpdateRequest,
    UsageCounts,
    UsagePlan,
    UsageResponse,
)
from app.services.limit_service import FREE_PLAN_LIMITS, LimitService
from app.utils.exceptions import ConflictException, NotFoundException, ValidationException

logger = logging.getLogger(__name__)

# check-limits accepts the singular names the UI sends
LIMIT_CHECK_TYPES = {
    "appointment": ResourceKind.APPOINTMENTS,
    "location": ResourceKind.LOCATIONS,
    "service": ResourceKind.SERVICES,
}


def _add_month(moment: datetime) -> datetime:
    """Same day next month, clamped to the month's last day."""
    year = moment.year + moment.month // 12
    month = moment.month % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


class SubscriptionService:
    """Service for plan catalog and subscription business logic."""

    @staticmethod
    def _parse_features(plan: Plan) -> list[str]:
        """
        Parse the JSON features list stored in Plan.features.

        Malformed JSON is logged and treated as no features so plan listings
        still render.
        """
        if not plan.features:
            return []
        try:
            features = json.loads(plan.features)
        except (TypeError, ValueError):
            logger.warning("Plan %s has malformed features JSON", plan.name)
            return []
        return [str(f) for f in features] if isinstance(features, list) else []

    @staticmethod
    def plan_to_response(plan: Plan) -> PlanResponse:
        return PlanResponse(
            id=plan.id,
            name=plan.name,
            display_name=plan.display_name,
            description=plan.description,
            price_monthly=float(plan.price_monthly or 0),
            price_yearly=float(plan.price_yearly or 0),
            currency=plan.currency,
            max_appointments=plan.max_appointments,
            max_locations=plan.max_locations,
            max_services=plan.max_services,
            features=SubscriptionService._parse_features(plan),
            is_active=plan.is_active,
            sort_order=plan.sort_order,
        )

    @staticmethod
    def _get_free_plan_defaults() -> MySubscription:
        """
        Free plan information when the catalog has no "free" row.

        Returns:
            MySubscription with the built-in free plan caps
        """
        return MySubscription(
            plan_name=FREE_PLAN_LIMITS.plan_name,
            plan_display_name="Free",
            status=SubscriptionStatus.ACTIVE.value,
            max_appointments=FREE_PLAN_LIMITS.max_appointments,
            max_locations=FREE_PLAN_LIMITS.max_locations,
            max_services=FREE_PLAN_LIMITS.max_services,
        )

    @staticmethod
    async def get_my_subscription(db: AsyncSession, user_id: int) -> MySubscription:
        """
        Get the user's subscription joined with its plan.

        Business Rules:
        - If the user has a subscription row (any status) -> return it with its plan
        - Else if the catalog has a "free" plan -> return that plan as active
        - Else -> return the built-in free defaults
        """
        row = await SubscriptionRepository.get_subscription_and_plan(db, user_id)
        if row is not None:
            subscription, plan = row
            return MySubscription(
                plan_name=plan.name,
                plan_display_name=plan.display_name,
                status=SubscriptionStatus(subscription.status).value,
                max_appointments=plan.max_appointments,
                max_locations=plan.max_locations,
                max_services=plan.max_services,
                features=SubscriptionService._parse_features(plan),
                price_monthly=float(plan.price_monthly or 0),
                price_yearly=float(plan.price_yearly or 0),
                billing_cycle=subscription.billing_cycle.value if subscription.billing_cycle else None,
                current_period_start=subscription.current_period_start,
                current_period_end=subscription.current_period_end,
            )

        free_plan = await SubscriptionRepository.get_plan_by_name(db, FREE_PLAN_LIMITS.plan_name)
        if free_plan is None:
            return SubscriptionService._get_free_plan_defaults()

        return MySubscription(
            plan_name=free_plan.name,
            plan_display_name=free_plan.display_name,
            status=SubscriptionStatus.ACTIVE.value,
            max_appointments=free_plan.max_appointments,
            max_locations=free_plan.max_locations,
            max_services=free_plan.max_services,
            features=SubscriptionService._parse_features(free_plan),
            price_monthly=float(free_plan.price_monthly or 0),
            price_yearly=float(free_plan.price_yearly or 0),
        )

    @staticmethod
    async def get_usage(db: AsyncSession, user_id: int) -> UsageResponse:
        """
        Plan caps plus live counts of the user's appointments, locations and services.

        The plan is the one granted by an active subscription, else the catalog's
        free plan, else the built-in free caps.
        """
        plan = await SubscriptionRepository.get_active_plan(db, user_id)
        if plan is None:
            plan = await SubscriptionRepository.get_plan_by_name(db, FREE_PLAN_LIMITS.plan_name)

        if plan is not None:
            usage_plan = UsagePlan(
                name=plan.name,
                display_name=plan.display_name,
                max_appointments=plan.max_appointments,
                max_locations=plan.max_locations,
                max_services=plan.max_services,
                features=SubscriptionService._parse_features(plan),
                price=float(plan.price_monthly or 0),
                currency=plan.currency or "GBP",
            )
        else:
            usage_plan = UsagePlan(
                name=FREE_PLAN_LIMITS.plan_name,
                display_name="Free",
                max_appointments=FREE_PLAN_LIMITS.max_appointments,
                max_locations=FREE_PLAN_LIMITS.max_locations,
                max_services=FREE_PLAN_LIMITS.max_services,
            )

        counts = await SubscriptionRepository.count_all_user_resources(db, user_id)
        return UsageResponse(
            plan=usage_plan,
            usage=UsageCounts(
                appointments=counts[ResourceKind.APPOINTMENTS],
                locations=counts[ResourceKind.LOCATIONS],
                services=counts[ResourceKind.SERVICES],
            ),
        )

    @staticmethod
    async def check_limits(db: AsyncSession, user_id: int, type_: Optional[str]) -> LimitCheckResponse:
        """
        Report whether the user can add one more item of ``type_``.

        Used by the UI to warn before a create request would be refused.
        """
        resource = LIMIT_CHECK_TYPES.get(type_ or "")
        if resource is None:
            raise ValidationException("Invalid type. Use appointment, location, or service")

        limits = await LimitService.get_user_limits(db, user_id)
        cap = limits.cap_for(resource)
        current = await SubscriptionRepository.count_user_resources(db, resource, user_id)

        is_unlimited = cap == UNLIMITED
        if is_unlimited:
            remaining, percent_used = UNLIMITED, 0
        else:
            remaining = max(0, cap - current)
            percent_used = round(current / cap * 100) if cap > 0 else 100

        return LimitCheckResponse(
            type=type_,
            current=current,
            max=cap,
            remaining=remaining,
            canAdd=is_unlimited or current < cap,
            isUnlimited=is_unlimited,
            percentUsed=percent_used,
        )

    # ---- Super admin: plan catalog ----

    @staticmethod
    async def list_plans(db: AsyncSession, active_only: bool = True) -> list[PlanResponse]:
        plans = await SubscriptionRepository.list_plans(db, active_only=active_only)
        return [SubscriptionService.plan_to_response(plan) for plan in plans]

    @staticmethod
    async def create_plan(db: AsyncSession, payload: PlanCreateRequest) -> Plan:
        if await SubscriptionRepository.get_plan_by_name(db, payload.name) is not None:
            raise ConflictException("Plan name already exists")

        data = payload.model_dump(exclude={"features"})
        plan = Plan(**data, features=json.dumps(payload.features))
        db.add(plan)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise ConflictException("Plan name already exists")
        await db.refresh(plan)
        logger.info("Created plan %s (id=%s)", plan.name, plan.id)
        return plan

    @staticmethod
    async def update_plan(db: AsyncSession, plan_id: int, payload: PlanUpdateRequest) -> Plan:
        plan = await SubscriptionRepository.get_plan(db, plan_id)
        if plan is None:
            raise NotFoundException("Plan not found")

        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        if "features" in changes:
            changes["features"] = json.dumps(changes["features"])
        for key, value in changes.items():
            setattr(plan, key, value)

        await db.commit()
        await db.refresh(plan)
        return plan

    @staticmethod
    async def delete_plan(db: AsyncSession, plan_id: int) -> None:
        plan = await SubscriptionRepository.get_plan(db, plan_id)
        if plan is None:
            raise NotFoundException("Plan not found")

        subscribers = await SubscriptionRepository.count_plan_subscriptions(db, plan_id)
        if subscribers > 0:
            raise ValidationException(
                f"Cannot delete plan: {subscribers} user(s) are currently subscribed"
            )

        await db.delete(plan)
        await db.commit()
        logger.info("Deleted plan %s (id=%s)", plan.name, plan_id)

    # ---- Super admin: user subscriptions ----

    @staticmethod
    async def list_subscriptions(db: AsyncSession) -> list[AdminSubscriptionRow]:
        rows = await SubscriptionRepository.list_subscriptions_with_users(db)
        return [
            AdminSubscriptionRow(
                id=subscription.id,
                user_id=user.id,
                username=user.username,
                email=user.email,
                plan_id=plan.id,
                plan_name=plan.name,
                plan_display_name=plan.display_name,
                price_monthly=float(plan.price_monthly or 0),
                status=SubscriptionStatus(subscription.status).value,
                billing_cycle=subscription.billing_cycle.value,
                current_period_start=subscription.current_period_start,
                current_period_end=subscription.current_period_end,
                created_at=subscription.created_at,
            )
            for subscription, user, plan in rows
        ]

    @staticmethod
    async def assign_subscription(db: AsyncSession, user_id: int, plan_id: int) -> Subscription:
        """
        Put a user on a plan, replacing any previous subscription.

        The subscription becomes active for one month from now.
        """
        if await db.get(User, user_id) is None:
            raise NotFoundException("User not found")
        if await SubscriptionRepository.get_plan(db, plan_id) is None:
            raise NotFoundException("Plan not found")

        now = datetime.now(timezone.utc)
        subscription = await SubscriptionRepository.get_subscription(db, user_id)
        if subscription is None:
            subscription = Subscription(user_id=user_id, plan_id=plan_id)
            db.add(subscription)
        subscription.plan_id = plan_id
        subscription.status = SubscriptionStatus.ACTIVE
        subscription.current_period_start = now
        subscription.current_period_end = _add_month(now)

        await db.commit()
        await db.refresh(subscription)
        logger.info("Assigned plan %s to user %s", plan_id, user_id)
        return subscription

    @staticmethod
    async def cancel_subscription(db: AsyncSession, user_id: int) -> Subscription:
        subscription = await SubscriptionRepository.get_subscription(db, user_id)
        if subscription is None:
            raise NotFoundException("Subscription not found")

        subscription.status = SubscriptionStatus.CANCELLED
        await db.commit()
        await db.refresh(subscription)
        logger.info("Cancelled subscription for user %s", user_id)
        return subscription
