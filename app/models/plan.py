"""Plan model - Subscription plan definitions.

This module contains the Plan model which defines subscription tiers
(free, starter, professional) with their prices and resource caps.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Integer, Numeric, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base
from app.models.models import IntIdMixin, TimestampMixin

if TYPE_CHECKING:
    from app.models.subscription import Subscription

# -1 in any max_* column means the resource is not capped
UNLIMITED = -1


class Plan(IntIdMixin, TimestampMixin, Base):
    """Subscription plan model.

    Plans define the caps available to users. Each plan has a unique name
    (e.g. "free", "starter", "professional") used in limit messages, and a
    display name used by the UI. Features are stored as a JSON list in TEXT.
    """

    __tablename__ = "subscription_plans"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    price_monthly: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=0, server_default=text("0"))
    price_yearly: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=0, server_default=text("0"))
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="GBP", server_default=text("'GBP'"))
    max_appointments: Mapped[int] = mapped_column(Integer, nullable=False, default=UNLIMITED, server_default=text("-1"))
    max_locations: Mapped[int] = mapped_column(Integer, nullable=False, default=UNLIMITED, server_default=text("-1"))
    max_services: Mapped[int] = mapped_column(Integer, nullable=False, default=UNLIMITED, server_default=text("-1"))
    # features is TEXT in database, storing a JSON list as string
    features: Mapped[Optional[str]] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=text("true"))
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default=text("0"))

    subscriptions: Mapped[list["Subscription"]] = relationship(
        "Subscription", back_populates="plan", passive_deletes=True
    )
