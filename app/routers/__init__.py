# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - subscriptions.py: Tier catalog, current plan and limits
# - products.py: Marketplace products (plan-limited)
# - portfolios.py: Creator portfolios (plan-limited)
# - tips.py: Tips to creators, priced by the fee calculator
# - fees.py: Fee quotes
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import subscriptions
from . import products
from . import portfolios
from . import tips
from . import fees

__all__ = [
    "health",
    "subscriptions",
    "products",
    "portfolios",
    "tips",
    "fees",
]
