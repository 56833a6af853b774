"""Business profile - one row of settings per user.

Holds the details printed on invoices and the home postcode that
location distances are measured from.
"""

from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base
from app.models.models import IntIdMixin, TimestampMixin


class BusinessProfile(IntIdMixin, TimestampMixin, Base):
    __tablename__ = "admin_settings"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    name: Mapped[Optional[str]] = mapped_column(Text)
    phone: Mapped[Optional[str]] = mapped_column(Text)
    email: Mapped[Optional[str]] = mapped_column(Text)
    business_name: Mapped[Optional[str]] = mapped_column(Text)
    bank_account_name: Mapped[Optional[str]] = mapped_column(Text)
    sort_code: Mapped[Optional[str]] = mapped_column(Text)
    account_number: Mapped[Optional[str]] = mapped_column(Text)
    home_address: Mapped[Optional[str]] = mapped_column(Text)
    home_postcode: Mapped[Optional[str]] = mapped_column(Text)
    currency: Mapped[str] = mapped_column(Text, nullable=False, default="GBP", server_default=text("'GBP'"))
    google_maps_api_key: Mapped[Optional[str]] = mapped_column(Text)
    # Set when the home postcode changes, until the client recomputes distances
    postcode_resync_needed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )

