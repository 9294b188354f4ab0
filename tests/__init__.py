# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the BLINNO billing API:
# - test_models.py: Tier catalog and model validation
# - test_subscription_service.py: Tier resolution
# - test_entitlement_service.py: Product/portfolio limit checks
# - test_resource_service.py: Shared create/delete base class
# - test_fee_service.py: Platform fee arithmetic
# - test_money.py: Decimal helpers
# - test_api.py: Route behaviour through the FastAPI test client
#
# Run tests with: pytest
# =============================================================================
