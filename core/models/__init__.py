# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - plan.py: Pricing plans, subscription rows and the tier catalog
# - entitlement.py: Result of a resource-limit check
# - fees.py: Platform fee breakdowns
# - resources.py: Product, portfolio and tip request bodies
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Plan Models - Tier catalog and subscriptions
# -----------------------------------------------------------------------------
from .plan import (
    FREE_PLAN,
    PERCENTAGE_TIERS,
    SUBSCRIPTION_TIERS,
    UNLIMITED,
    PaymentStatus,
    Plan,
    PlanKind,
    ResourceKind,
    SubscriptionRecord,
    SubscriptionStatus,
    TierDescription,
    TierInfo,
    TierLimits,
    describe_tiers,
    get_percentage_plan,
    get_subscription_plan,
)

# -----------------------------------------------------------------------------
# Entitlement Models
# -----------------------------------------------------------------------------
from .entitlement import EntitlementResult, EntitlementSummary

# -----------------------------------------------------------------------------
# Fee Models
# -----------------------------------------------------------------------------
from .fees import FeeAbsorption, FeeBreakdown, TransactionType

# -----------------------------------------------------------------------------
# Resource Models
# -----------------------------------------------------------------------------
from .resources import PortfolioCreate, ProductCreate, TipCreate

__all__ = [
    # Plan
    "FREE_PLAN",
    "PERCENTAGE_TIERS",
    "SUBSCRIPTION_TIERS",
    "UNLIMITED",
    "PaymentStatus",
    "Plan",
    "PlanKind",
    "ResourceKind",
    "SubscriptionRecord",
    "SubscriptionStatus",
    "TierDescription",
    "TierInfo",
    "TierLimits",
    "describe_tiers",
    "get_percentage_plan",
    "get_subscription_plan",
    # Entitlement
    "EntitlementResult",
    "EntitlementSummary",
    # Fees
    "FeeAbsorption",
    "FeeBreakdown",
    "TransactionType",
    # Resources
    "PortfolioCreate",
    "ProductCreate",
    "TipCreate",
]
