# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the billing logic:
# - models/: Pydantic schemas and the tier catalog
# - services/: Subscription resolution, entitlement checks, fee
#   calculation and the resource services that use them
#
# Code in this package should NOT import from FastAPI routers.
# =============================================================================
