# =============================================================================
# lib/money.py - Decimal Money Helpers
# =============================================================================
# All monetary arithmetic in the service goes through Decimal. Floats are
# converted via their shortest repr (str) so 0.1 stays 0.1 rather than
# 0.1000000000000000055511151231257827.
#
# Usage:
#   from lib.money import to_decimal, quantize_money
#   fee = quantize_money(to_decimal("100") * Decimal("0.03"), "USD")
# =============================================================================

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from lib.utils import ApplicationError

# ISO 4217 minor units for currencies the platform settles in.
# Anything not listed uses two decimal places.
CURRENCY_MINOR_UNITS: dict[str, int] = {
    "TZS": 2,
    "KES": 2,
    "UGX": 0,
    "RWF": 0,
    "USD": 2,
    "EUR": 2,
    "GBP": 2,
}

DEFAULT_MINOR_UNITS = 2


class MoneyError(ApplicationError):
    """Raised when a value can't be interpreted as an amount of money."""

    def __init__(self, value: Any):
        super().__init__(
            message=f"Not a valid amount: {value!r}",
            code="INVALID_MONEY",
            suggestion="Pass a number or a numeric string",
            details={"value": repr(value)},
        )


def to_decimal(value: Any) -> Decimal:
    """
    Convert an int, float, str or Decimal into a finite Decimal.

    Raises:
        MoneyError: For booleans, None, NaN/Infinity or unparseable strings
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or value is None:
        raise MoneyError(value)
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise MoneyError(value)
    else:
        raise MoneyError(value)

    if not result.is_finite():
        raise MoneyError(value)
    return result


def minor_units(currency: str) -> int:
    """Number of decimal places used by `currency`."""
    return CURRENCY_MINOR_UNITS.get(currency.upper(), DEFAULT_MINOR_UNITS)


def quantize_money(amount: Decimal, currency: str) -> Decimal:
    """
    Round `amount` half-up to the currency's minor unit.

    Example:
        quantize_money(Decimal("2.705"), "USD")  # Decimal("2.71")
        quantize_money(Decimal("2.5"), "UGX")    # Decimal("3")
    """
    exponent = Decimal(1).scaleb(-minor_units(currency))
    return amount.quantize(exponent, rounding=ROUND_HALF_UP)
