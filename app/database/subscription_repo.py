"""Repository layer for subscription-related database operations.

This module contains ONLY database access logic - no business rules.
Repository functions fetch data from the database and return raw models or primitive values.

Key Concepts:
- Plan: A subscription tier (free, starter, professional) with resource caps
- Subscription: A user's subscription to a plan; only status 'active' grants the plan
- Usage: the number of rows a user owns in a capped table, counted live
"""

from typing import Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.models import Appointment, Location, Service, User
from app.models.plan import Plan
from app.models.subscription import Subscription
from app.models.subscription_enums import ResourceKind, SubscriptionStatus

_RESOURCE_MODELS = {
    ResourceKind.APPOINTMENTS: Appointment,
    ResourceKind.LOCATIONS: Location,
    ResourceKind.SERVICES: Service,
}


class SubscriptionRepository:
    """Repository for subscription database operations."""

    @staticmethod
    async def get_active_plan(db: AsyncSession, user_id: int) -> Optional[Plan]:
        """
        Fetch the plan granted by the user's active subscription.

        Args:
            db: Database session
            user_id: ID of the user

        Returns:
            Plan if the user has an active subscription, None otherwise
        """
        result = await db.execute(
            select(Plan)
            .join(Subscription, Subscription.plan_id == Plan.id)
            .where(
                Subscription.user_id == user_id,
                Subscription.status == SubscriptionStatus.ACTIVE,
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_subscription_and_plan(
        db: AsyncSession, user_id: int
    ) -> Optional[Tuple[Subscription, Plan]]:
        """
        Fetch a user's subscription row (any status) and its plan.

        Returns:
            Tuple of (Subscription, Plan) if found, None otherwise
        """
        result = await db.execute(
            select(Subscription, Plan)
            .join(Plan, Subscription.plan_id == Plan.id)
            .where(Subscription.user_id == user_id)
        )
        row = result.first()
        return (row[0], row[1]) if row else None

    @staticmethod
    async def get_subscription(db: AsyncSession, user_id: int) -> Optional[Subscription]:
        result = await db.execute(select(Subscription).where(Subscription.user_id == user_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def count_user_resources(db: AsyncSession, resource: ResourceKind, user_id: int) -> int:
        """
        Count the rows a user owns in the table backing ``resource``.

        Every row counts; there is no soft-delete column on these tables.

        Args:
            db: Database session
            resource: Which capped resource to count
            user_id: ID of the owning user

        Returns:
            Number of rows (integer)
        """
        model = _RESOURCE_MODELS[resource]
        result = await db.execute(
            select(func.count()).select_from(model).where(model.user_id == user_id)
        )
        return int(result.scalar_one())

    @staticmethod
    async def count_all_user_resources(db: AsyncSession, user_id: int) -> dict[ResourceKind, int]:
        return {
            resource: await SubscriptionRepository.count_user_resources(db, resource, user_id)
            for resource in ResourceKind
        }

    @staticmethod
    async def get_plan_by_name(db: AsyncSession, plan_name: str) -> Optional[Plan]:
        """
        Fetch a plan by its name (e.g., "free", "starter", "professional").
        """
        result = await db.execute(select(Plan).where(Plan.name == plan_name))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_plan(db: AsyncSession, plan_id: int) -> Optional[Plan]:
        return await db.get(Plan, plan_id)

    @staticmethod
    async def list_plans(db: AsyncSession, active_only: bool = True) -> list[Plan]:
        stmt = select(Plan)
        if active_only:
            stmt = stmt.where(Plan.is_active.is_(True))
        result = await db.execute(stmt.order_by(Plan.sort_order.asc(), Plan.id.asc()))
        return list(result.scalars().all())

    @staticmethod
    async def count_plan_subscriptions(db: AsyncSession, plan_id: int) -> int:
        result = await db.execute(
            select(func.count()).select_from(Subscription).where(Subscription.plan_id == plan_id)
        )
        return int(result.scalar_one())

    @staticmethod
    async def list_subscriptions_with_users(
        db: AsyncSession,
    ) -> list[Tuple[Subscription, User, Plan]]:
        """All subscriptions joined with their user and plan, newest first."""
        result = await db.execute(
            select(Subscription, User, Plan)
            .join(User, Subscription.user_id == User.id)
            .join(Plan, Subscription.plan_id == Plan.id)
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        )
        return [(row[0], row[1], row[2]) for row in result.all()]
