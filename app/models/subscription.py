"""Subscription model - User's subscription to a plan.

This module contains the Subscription model which links a user to a plan
and tracks subscription status and billing periods. A user has at most one
row; a user without an active row is on the implicit free plan.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Enum, ForeignKey, Integer, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import TIMESTAMP

from app.models.base import Base
from app.models.models import IntIdMixin, TimestampMixin
from app.models.subscription_enums import BillingCycle, SubscriptionStatus

if TYPE_CHECKING:
    from app.models.models import User
    from app.models.plan import Plan


class Subscription(IntIdMixin, TimestampMixin, Base):
    """User subscription model."""

    __tablename__ = "user_subscriptions"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    plan_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("subscription_plans.id"), nullable=False
    )
    status: Mapped[SubscriptionStatus] = mapped_column(
        Enum(SubscriptionStatus, name="subscription_status", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=SubscriptionStatus.ACTIVE,
        server_default=text("'active'"),
    )
    billing_cycle: Mapped[BillingCycle] = mapped_column(
        Enum(BillingCycle, name="billing_cycle", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=BillingCycle.MONTHLY,
        server_default=text("'monthly'"),
    )
    current_period_start: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True))
    current_period_end: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True))

    user: Mapped["User"] = relationship("User", back_populates="subscription")
    plan: Mapped["Plan"] = relationship("Plan", back_populates="subscriptions")
