# =============================================================================
# core/models/plan.py - Pricing Plans and the Tier Catalog
# =============================================================================
# BLINNO sells two pricing tracks:
# - subscription: flat monthly fee (free / creator / professional / enterprise)
# - percentage: no monthly fee, commission per transaction (basic / premium / pro)
#
# Each tier caps how many products and portfolios a creator may publish.
# A limit of -1 means unlimited. The catalog is code, not data: it is built
# once at import and exposed through read-only mappings.
# =============================================================================

from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

# Sentinel used in the catalog for "no cap"
UNLIMITED = -1


class PlanKind(str, Enum):
    """Which pricing track a plan belongs to."""
    SUBSCRIPTION = "subscription"
    PERCENTAGE = "percentage"


class ResourceKind(str, Enum):
    """
    Resources whose creation is capped by the user's plan.

    The value doubles as the TierLimits attribute name; `table` is the
    Supabase table that holds the rows.
    """
    PRODUCT = "product"
    PORTFOLIO = "portfolio"

    @property
    def table(self) -> str:
        return f"{self.value}s"


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    PAUSED = "paused"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"
    PARTIAL = "partial"


class TierLimits(BaseModel):
    """Per-tier creation caps. -1 means unlimited."""

    model_config = ConfigDict(frozen=True)

    products: int = Field(..., ge=UNLIMITED)
    portfolios: int = Field(..., ge=UNLIMITED)

    def for_resource(self, resource: ResourceKind) -> int:
        """Return the cap for one resource kind."""
        return self.products if resource is ResourceKind.PRODUCT else self.portfolios


class Plan(BaseModel):
    """A named tier on one of the two pricing tracks."""

    model_config = ConfigDict(frozen=True)

    kind: PlanKind
    tier_name: str
    limits: TierLimits


class TierInfo(BaseModel):
    """
    The plan a user resolved to for one request.

    `is_default` is True when the free tier was substituted because the
    user had no subscription row, an unrecognized tier name, or the lookup
    failed.
    """

    model_config = ConfigDict(frozen=True)

    kind: PlanKind
    name: str
    limits: TierLimits
    is_default: bool = False

    @classmethod
    def from_plan(cls, plan: Plan, is_default: bool = False) -> "TierInfo":
        return cls(
            kind=plan.kind,
            name=plan.tier_name,
            limits=plan.limits,
            is_default=is_default,
        )


class SubscriptionRecord(BaseModel):
    """
    A row of the platform_subscriptions table.

    Only `tier`, `pricing_model` and `percentage_tier` drive entitlements;
    the rest is returned to the client as-is.
    """

    model_config = ConfigDict(extra="allow")

    user_id: str
    tier: str | None = None
    pricing_model: str | None = PlanKind.SUBSCRIPTION.value
    percentage_tier: str | None = None
    status: str | None = SubscriptionStatus.ACTIVE.value
    payment_status: str | None = None
    current_period_start: datetime | None = None
    current_period_end: datetime | None = None
    cancel_at_period_end: bool = False


# =============================================================================
# Tier Catalog
# =============================================================================

def _plan(kind: PlanKind, name: str, products: int, portfolios: int) -> Plan:
    return Plan(
        kind=kind,
        tier_name=name,
        limits=TierLimits(products=products, portfolios=portfolios),
    )


SUBSCRIPTION_TIERS: Mapping[str, Plan] = MappingProxyType({
    "free": _plan(PlanKind.SUBSCRIPTION, "free", 5, 3),
    "creator": _plan(PlanKind.SUBSCRIPTION, "creator", UNLIMITED, UNLIMITED),
    "professional": _plan(PlanKind.SUBSCRIPTION, "professional", UNLIMITED, UNLIMITED),
    "enterprise": _plan(PlanKind.SUBSCRIPTION, "enterprise", UNLIMITED, UNLIMITED),
})

PERCENTAGE_TIERS: Mapping[str, Plan] = MappingProxyType({
    "basic": _plan(PlanKind.PERCENTAGE, "basic", 5, 3),
    "premium": _plan(PlanKind.PERCENTAGE, "premium", UNLIMITED, UNLIMITED),
    "pro": _plan(PlanKind.PERCENTAGE, "pro", UNLIMITED, UNLIMITED),
})

FREE_PLAN: Plan = SUBSCRIPTION_TIERS["free"]


def get_subscription_plan(name: str | None) -> Plan | None:
    """Look up a subscription tier; None if the name isn't in the catalog."""
    return SUBSCRIPTION_TIERS.get(name) if name else None


def get_percentage_plan(name: str | None) -> Plan | None:
    """Look up a percentage tier; None if the name isn't in the catalog."""
    return PERCENTAGE_TIERS.get(name) if name else None


# Marketing copy for the public tier list. Prices are monthly, in TZS.
SUBSCRIPTION_TIER_DETAILS: Mapping[str, Mapping[str, object]] = MappingProxyType({
    "free": MappingProxyType({
        "name": "Free",
        "monthly_price": 0,
        "features": (
            "Basic profile",
            "5 product listings",
            "Standard support",
            "8% marketplace fees",
            "6% digital product fees",
            "10% service booking fees",
            "12% commission work fees",
        ),
    }),
    "creator": MappingProxyType({
        "name": "Creator",
        "monthly_price": 15000,
        "features": (
            "Unlimited listings",
            "Advanced analytics",
            "Priority support",
            "Featured listings",
            "Reduced 5% subscription fees",
            "Standard transaction fees",
        ),
    }),
    "professional": MappingProxyType({
        "name": "Professional",
        "monthly_price": 40000,
        "features": (
            "All Creator features",
            "Marketing tools",
            "API access",
            "Custom branding",
            "Lower 5% subscription fees",
            "Priority transaction processing",
        ),
    }),
    "enterprise": MappingProxyType({
        "name": "Enterprise",
        # Custom pricing, negotiated per account
        "monthly_price": 0,
        "features": (
            "All Professional features",
            "Custom integrations",
            "Dedicated support",
            "Custom fee structure",
            "White-label options",
            "Dedicated account manager",
        ),
    }),
})


class TierDescription(BaseModel):
    """One entry of GET /subscriptions/tiers."""
    tier: str
    kind: PlanKind
    name: str
    monthly_price: int | None = None
    features: list[str] = Field(default_factory=list)
    limits: TierLimits


def describe_tiers() -> list[TierDescription]:
    """Build the public catalog for both pricing tracks."""
    described = []
    for key, plan in SUBSCRIPTION_TIERS.items():
        details = SUBSCRIPTION_TIER_DETAILS[key]
        described.append(TierDescription(
            tier=key,
            kind=plan.kind,
            name=details["name"],
            monthly_price=details["monthly_price"],
            features=list(details["features"]),
            limits=plan.limits,
        ))
    for key, plan in PERCENTAGE_TIERS.items():
        described.append(TierDescription(
            tier=key,
            kind=plan.kind,
            name=key.capitalize(),
            limits=plan.limits,
        ))
    return described
