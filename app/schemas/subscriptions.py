"""Subscription and plan schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class PlanCaps(BaseModel):
    """Resource caps of a plan; -1 means unlimited."""

    max_appointments: int = Field(..., ge=-1)
    max_locations: int = Field(..., ge=-1)
    max_services: int = Field(..., ge=-1)


class PlanResponse(PlanCaps):
    """Subscription plan details."""

    id: int
    name: str
    display_name: str
    description: Optional[str] = None
    price_monthly: float
    price_yearly: float
    currency: str
    features: list[str]
    is_active: bool
    sort_order: int


class PlanCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    display_name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=500)
    price_monthly: Decimal = Field(default=Decimal("0"), ge=0)
    price_yearly: Decimal = Field(default=Decimal("0"), ge=0)
    currency: str = Field(default="GBP", min_length=3, max_length=3)
    max_appointments: int = Field(default=-1, ge=-1)
    max_locations: int = Field(default=-1, ge=-1)
    max_services: int = Field(default=-1, ge=-1)
    features: list[str] = Field(default_factory=list)
    is_active: bool = True
    sort_order: int = 0


class PlanUpdateRequest(BaseModel):
    """Partial plan update; omitted fields are left unchanged. The name is fixed."""

    display_name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=500)
    price_monthly: Optional[Decimal] = Field(None, ge=0)
    price_yearly: Optional[Decimal] = Field(None, ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    max_appointments: Optional[int] = Field(None, ge=-1)
    max_locations: Optional[int] = Field(None, ge=-1)
    max_services: Optional[int] = Field(None, ge=-1)
    features: Optional[list[str]] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class MySubscription(PlanCaps):
    """Current user's subscription joined with its plan."""

    plan_name: str
    plan_display_name: str
    status: str
    features: list[str] = Field(default_factory=list)
    price_monthly: float = 0.0
    price_yearly: float = 0.0
    billing_cycle: Optional[str] = None
    current_period_start: Optional[datetime] = None
    current_period_end: Optional[datetime] = None


class UsagePlan(PlanCaps):
    name: str
    display_name: str
    features: list[str] = Field(default_factory=list)
    price: float = 0.0
    currency: str = "GBP"


class UsageCounts(BaseModel):
    appointments: int = Field(..., ge=0)
    locations: int = Field(..., ge=0)
    services: int = Field(..., ge=0)


class UsageResponse(BaseModel):
    """Plan caps next to current usage, for the My Plan page."""

    plan: UsagePlan
    usage: UsageCounts


class LimitCheckResponse(BaseModel):
    """Whether one more item of a type can be added."""

    type: str
    current: int = Field(..., ge=0)
    max: int = Field(..., ge=-1)
    remaining: int = Field(..., ge=-1, description="-1 means unlimited")
    can_add: bool = Field(..., alias="canAdd")
    is_unlimited: bool = Field(..., alias="isUnlimited")
    percent_used: int = Field(..., ge=0, alias="percentUsed")

    class Config:
        populate_by_name = True


class AssignSubscriptionRequest(BaseModel):
    user_id: int
    plan_id: int


class AdminSubscriptionRow(BaseModel):
    id: int
    user_id: int
    username: str
    email: Optional[str] = None
    plan_id: int
    plan_name: str
    plan_display_name: str
    price_monthly: float
    status: str
    billing_cycle: str
    current_period_start: Optional[datetime] = None
    current_period_end: Optional[datetime] = None
    created_at: datetime
