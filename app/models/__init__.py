from app.models.base import Base
from app.models.models import Appointment, Location, Service, User
from app.models.plan import Plan
from app.models.profile import BusinessProfile
from app.models.subscription import Subscription
from app.models.subscription_enums import BillingCycle, ResourceKind, SubscriptionStatus

__all__ = [
    "Appointment",
    "Base",
    "BillingCycle",
    "BusinessProfile",
    "Location",
    "Plan",
    "ResourceKind",
    "Service",
    "Subscription",
    "SubscriptionStatus",
    "User",
]
