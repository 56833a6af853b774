"""Subscription-related enums.

This module contains enums used by subscription models:
- SubscriptionStatus: Status of a subscription
- BillingCycle: How often a subscription is billed
- ResourceKind: Resources counted against plan caps
"""

import enum


class SubscriptionStatus(str, enum.Enum):
    """Status of a subscription.

    Only ACTIVE subscriptions are consulted when resolving plan limits.
    """

    TRIALING = "trialing"
    ACTIVE = "active"
    CANCELLED = "cancelled"
    PAST_DUE = "past_due"


class BillingCycle(str, enum.Enum):
    """Billing cadence of a subscription."""

    MONTHLY = "monthly"
    YEARLY = "yearly"


class ResourceKind(str, enum.Enum):
    """A user-owned resource whose row count is capped by the user's plan."""

    APPOINTMENTS = "appointments"
    LOCATIONS = "locations"
    SERVICES = "services"

    @property
    def label(self) -> str:
        """Singular display name used in limit error titles, e.g. "Location"."""
        return self.value[:-1].capitalize()

    @property
    def plan_field(self) -> str:
        """Name of the Plan column holding the cap, e.g. "max_locations"."""
        return f"max_{self.value}"
