# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - money.py: Decimal conversion and per-currency rounding
# - utils.py: Shared utilities (error base class, UUID normalization)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.money import MoneyError, minor_units, quantize_money, to_decimal
from lib.utils import ApplicationError, normalize_uuid

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Money
    "MoneyError",
    "minor_units",
    "quantize_money",
    "to_decimal",
    # Utils
    "ApplicationError",
    "normalize_uuid",
]
