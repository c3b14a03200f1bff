"""Subscription plan tiers."""

from enum import Enum as PyEnum


class SubscriptionPlan(str, PyEnum):
    """
    Subscription tier of a tenant.

    The tier only caps the number of users; billing is handled elsewhere.
    """

    FREE = "free"
    BASIC = "basic"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"

    @property
    def max_users(self) -> int | None:
        """Maximum number of users, None = unlimited"""
        return _MAX_USERS[self]


_MAX_USERS: dict[SubscriptionPlan, int | None] = {
    SubscriptionPlan.FREE: 1,
    SubscriptionPlan.BASIC: 3,
    SubscriptionPlan.PREMIUM: 10,
    SubscriptionPlan.ENTERPRISE: None,
}
