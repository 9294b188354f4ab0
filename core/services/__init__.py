# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .subscription_service import SubscriptionService, resolve_tier_from_record
from .entitlement_service import EntitlementService
from .fee_service import FeeConfig, PlatformFeeService, platform_fees
from .product_service import ProductService
from .portfolio_service import PortfolioService
from .tip_service import TipService

__all__ = [
    "SubscriptionService",
    "resolve_tier_from_record",
    "EntitlementService",
    "FeeConfig",
    "PlatformFeeService",
    "platform_fees",
    "ProductService",
    "PortfolioService",
    "TipService",
]
