from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean,
    Date,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

from app.models.base import Base

if TYPE_CHECKING:
    from app.models.subscription import Subscription


class IntIdMixin:
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class CreatedAtMixin:
    created_at: Mapped[dt.datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        nullable=False
    )


class TimestampMixin(CreatedAtMixin):
    """created_at plus an updated_at refreshed on every ORM update"""
    updated_at: Mapped[Optional[dt.datetime]] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )


class UserOwnedMixin:
    """Rows owned by exactly one user; these are what plan limits count."""
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )


class User(IntIdMixin, CreatedAtMixin, Base):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(320))
    is_super_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=text("false"))

    subscription: Mapped[Optional["Subscription"]] = relationship(
        "Subscription", back_populates="user", uselist=False
    )


class Location(IntIdMixin, UserOwnedMixin, Base):
    """A client venue the business travels to (table name kept for existing databases)."""
    __tablename__ = "address_data"
    __table_args__ = (UniqueConstraint("user_id", "location_name", name="uq_location_user_name"),)

    location_name: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[Optional[str]] = mapped_column(Text)
    city_town: Mapped[Optional[str]] = mapped_column(Text)
    post_code: Mapped[Optional[str]] = mapped_column(Text)
    distance: Mapped[Optional[float]] = mapped_column(Float)
    contact_name: Mapped[Optional[str]] = mapped_column(Text)
    email_address: Mapped[Optional[str]] = mapped_column(Text)
    contact_details: Mapped[Optional[str]] = mapped_column(Text)
    phone: Mapped[Optional[str]] = mapped_column(Text)
    notes: Mapped[Optional[str]] = mapped_column(Text)


class Service(IntIdMixin, UserOwnedMixin, Base):
    __tablename__ = "services"
    __table_args__ = (UniqueConstraint("user_id", "service_name", name="uq_service_user_name"),)

    service_name: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)


class Appointment(IntIdMixin, UserOwnedMixin, CreatedAtMixin, Base):
    __tablename__ = "appointments"
    __table_args__ = (Index("ix_appointments_user_date_id", "user_id", "date", "id"),)

    client_name: Mapped[str] = mapped_column(Text, nullable=False)
    service: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=text("false"))
    distance: Mapped[Optional[float]] = mapped_column(Float)
    payment_date: Mapped[Optional[dt.datetime]] = mapped_column(TIMESTAMP(timezone=True))
