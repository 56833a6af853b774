"""Plan limit enforcement for resource creation.

The gate answers one question per create request: may this user add
``increment`` more rows of a capped resource? It never raises for an exceeded
limit; callers get a LimitDecision and decide how to respond.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Literal, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.database.subscription_repo import SubscriptionRepository
from app.models.models import User
from app.models.plan import UNLIMITED, Plan
from app.models.subscription_enums import ResourceKind

logger = logging.getLogger(__name__)

LookupErrorPolicy = Literal["allow", "deny"]


@dataclass(frozen=True)
class PlanLimits:
    """Caps resolved for one user at one point in time."""

    plan_name: str
    max_appointments: int
    max_locations: int
    max_services: int

    def cap_for(self, resource: ResourceKind) -> int:
        return getattr(self, resource.plan_field)

    @classmethod
    def from_plan(cls, plan: Plan) -> "PlanLimits":
        return cls(
            plan_name=plan.name,
            max_appointments=plan.max_appointments,
            max_locations=plan.max_locations,
            max_services=plan.max_services,
        )


# Applied to users with no active subscription
FREE_PLAN_LIMITS = PlanLimits(
    plan_name="free",
    max_appointments=50,
    max_locations=2,
    max_services=10,
)


class DecisionReason(str, enum.Enum):
    SUPER_ADMIN = "super_admin"
    UNLIMITED = "unlimited"
    WITHIN_LIMIT = "within_limit"
    LIMIT_REACHED = "limit_reached"
    LOOKUP_ERROR = "lookup_error"


@dataclass(frozen=True)
class LimitDecision:
    allowed: bool
    resource: ResourceKind
    reason: DecisionReason
    limit: Optional[int] = None
    current: Optional[int] = None
    plan_name: Optional[str] = None

    @property
    def message(self) -> str:
        if self.reason is DecisionReason.LOOKUP_ERROR:
            return f"Unable to verify your {self.resource.value} limit. Please try again later."
        return (
            f"Your {self.plan_name} plan allows {self.limit} {self.resource.value}. "
            "Please upgrade to add more."
        )

    @property
    def usage(self) -> Optional[dict[str, int]]:
        """{current, max} for display, when the gate counted rows."""
        if self.current is None or self.limit is None:
            return None
        return {"current": self.current, "max": self.limit}


class LimitService:
    """Service for checking plan caps before resources are created."""

    @staticmethod
    async def get_user_limits(db: AsyncSession, user_id: int) -> PlanLimits:
        """Resolve caps from the user's active subscription, or the free plan."""
        plan = await SubscriptionRepository.get_active_plan(db, user_id)
        if plan is None:
            return FREE_PLAN_LIMITS
        return PlanLimits.from_plan(plan)

    @staticmethod
    async def check_limit(
        db: AsyncSession,
        resource: Union[ResourceKind, str],
        principal: User,
        increment: int = 1,
        on_lookup_error: Optional[LookupErrorPolicy] = None,
    ) -> LimitDecision:
        """
        Decide whether ``principal`` may create ``increment`` more ``resource`` rows.

        Rules, in order:
        1. Super admins are always allowed; the store is not touched.
        2. A cap of -1 allows without counting.
        3. Otherwise the user's rows are counted and the request is denied when
           ``current + increment > cap`` (``current >= cap`` for a single row).

        If resolving the plan or counting fails, the error is logged and the
        configured policy applies (``LIMIT_LOOKUP_ERROR_POLICY``, default "allow").

        Returns:
            LimitDecision describing the outcome
        """
        resource = ResourceKind(resource)

        if principal.is_super_admin:
            return LimitDecision(allowed=True, resource=resource, reason=DecisionReason.SUPER_ADMIN)

        policy = on_lookup_error or settings.LIMIT_LOOKUP_ERROR_POLICY

        try:
            limits = await LimitService.get_user_limits(db, principal.id)
            cap = limits.cap_for(resource)
            if cap == UNLIMITED:
                return LimitDecision(
                    allowed=True,
                    resource=resource,
                    reason=DecisionReason.UNLIMITED,
                    limit=UNLIMITED,
                    plan_name=limits.plan_name,
                )
            current = await SubscriptionRepository.count_user_resources(db, resource, principal.id)
        except Exception:
            logger.exception(
                "Error checking %s limit for user %s; policy=%s", resource.value, principal.id, policy
            )
            return LimitDecision(
                allowed=policy == "allow",
                resource=resource,
                reason=DecisionReason.LOOKUP_ERROR,
            )

        if current + increment > cap:
            logger.info(
                "%s limit reached for user %s (%s/%s on %s plan)",
                resource.label,
                principal.id,
                current,
                cap,
                limits.plan_name,
            )
            return LimitDecision(
                allowed=False,
                resource=resource,
                reason=DecisionReason.LIMIT_REACHED,
                limit=cap,
                current=current,
                plan_name=limits.plan_name,
            )

        return LimitDecision(
            allowed=True,
            resource=resource,
            reason=DecisionReason.WITHIN_LIMIT,
            limit=cap,
            current=current,
            plan_name=limits.plan_name,
        )
