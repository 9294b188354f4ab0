# =============================================================================
# core/services/fee_service.py - Platform Fee Calculation
# =============================================================================
# Computes what the platform, the payment processor and the creator each
# get from a transaction. Pure functions over Decimal; no I/O.
#
# Fee structure (defaults, see app/config.py):
# - Marketplace sales: 8%
# - Digital products: 6%
# - Service bookings: 10%
# - Commission work: 12%
# - Subscriptions: 5%
# - Tips/donations: 3%
# - Payment processing: 2.5% + a flat fee that depends on the currency
#
# Users on percentage-based pricing get tier-specific commission rates for
# the four sales transaction types.
#
# Usage:
#   from core.services.fee_service import platform_fees
#   breakdown = platform_fees.calculate_tip_fee(100, "USD")
# =============================================================================

import logging
from decimal import Decimal
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict

from app.config import Settings, settings
from app.exceptions import InvalidAmountError, UnknownTransactionTypeError
from core.models.fees import FeeAbsorption, FeeBreakdown, TransactionType
from lib.money import MoneyError, quantize_money, to_decimal

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Transaction types whose rate a percentage tier may override
TIER_ADJUSTABLE_TYPES = frozenset({
    TransactionType.MARKETPLACE,
    TransactionType.DIGITAL_PRODUCT,
    TransactionType.SERVICE_BOOKING,
    TransactionType.COMMISSION_WORK,
})


class FeeConfig(BaseModel):
    """
    Every constant the calculator uses.

    Build it from Settings with FeeConfig.from_settings(), or construct one
    directly in tests.
    """

    model_config = ConfigDict(frozen=True)

    rates: Mapping[TransactionType, Decimal]
    percentage_tier_rates: Mapping[str, Mapping[TransactionType, Decimal]]
    processing_rate: Decimal
    default_fixed_fee: Decimal
    currency_fixed_fees: Mapping[str, Decimal]
    absorption: FeeAbsorption
    default_currency: str

    @classmethod
    def from_settings(cls, config: Settings) -> "FeeConfig":
        return cls(
            rates={
                TransactionType.MARKETPLACE: config.MARKETPLACE_FEE_RATE,
                TransactionType.DIGITAL_PRODUCT: config.DIGITAL_PRODUCT_FEE_RATE,
                TransactionType.SERVICE_BOOKING: config.SERVICE_BOOKING_FEE_RATE,
                TransactionType.COMMISSION_WORK: config.COMMISSION_WORK_FEE_RATE,
                TransactionType.SUBSCRIPTION: config.SUBSCRIPTION_FEE_RATE,
                TransactionType.TIP: config.TIP_FEE_RATE,
            },
            percentage_tier_rates={
                tier: {TransactionType(kind): rate for kind, rate in rates.items()}
                for tier, rates in config.PERCENTAGE_TIER_FEE_RATES.items()
            },
            processing_rate=config.PAYMENT_PROCESSING_RATE,
            default_fixed_fee=config.PAYMENT_PROCESSING_FIXED_FEE,
            currency_fixed_fees={
                code.upper(): fee for code, fee in config.CURRENCY_FIXED_FEES.items()
            },
            absorption=FeeAbsorption(config.FEE_ABSORPTION),
            default_currency=config.DEFAULT_CURRENCY.upper(),
        )


class PlatformFeeService:
    """
    Platform fee calculator.

    Monetary inputs may be int, str, Decimal or float (floats go through
    str() first). Every component is rounded half-up to the currency's
    minor unit; the payout is derived by subtraction so the parts always
    add back to the subtotal exactly.
    """

    def __init__(self, config: FeeConfig | None = None):
        self.config = config or FeeConfig.from_settings(settings)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def get_fixed_fee_for_currency(self, currency: str) -> Decimal:
        """Flat processing fee for `currency`, or the configured default."""
        return self.config.currency_fixed_fees.get(currency.upper(), self.config.default_fixed_fee)

    def get_commission_rate(
        self,
        transaction_type: TransactionType,
        percentage_tier: str | None = None,
    ) -> Decimal:
        """Platform rate for a transaction, honouring percentage-tier overrides."""
        if percentage_tier and transaction_type in TIER_ADJUSTABLE_TYPES:
            tier_rates = self.config.percentage_tier_rates.get(percentage_tier)
            if tier_rates and transaction_type in tier_rates:
                return tier_rates[transaction_type]
            logger.debug(f"No {transaction_type.value} rate for tier {percentage_tier!r}, using default")
        return self.config.rates[transaction_type]

    @staticmethod
    def _parse_amount(amount: Any) -> Decimal:
        try:
            value = to_decimal(amount)
        except MoneyError:
            raise InvalidAmountError(amount)
        if value <= ZERO:
            raise InvalidAmountError(amount)
        return value

    @staticmethod
    def _parse_transaction_type(transaction_type: TransactionType | str) -> TransactionType:
        try:
            return TransactionType(transaction_type)
        except ValueError:
            raise UnknownTransactionTypeError(
                str(transaction_type),
                [t.value for t in TransactionType],
            )

    # -------------------------------------------------------------------------
    # Core Calculation
    # -------------------------------------------------------------------------

    def calculate_fee(
        self,
        amount: Any,
        transaction_type: TransactionType | str,
        currency: str | None = None,
        percentage_tier: str | None = None,
    ) -> FeeBreakdown:
        """
        Break a gross amount down into platform fee, processing fee and payout.

        Args:
            amount: Gross price of the transaction, must be > 0
            transaction_type: Which commission rate applies
            currency: ISO code; defaults to DEFAULT_CURRENCY
            percentage_tier: basic/premium/pro for percentage-pricing sellers

        Returns:
            FeeBreakdown with every value quantized to the currency

        Raises:
            InvalidAmountError: If amount isn't a positive number
            UnknownTransactionTypeError: If transaction_type is unsupported
        """
        transaction_type = self._parse_transaction_type(transaction_type)
        currency = (currency or self.config.default_currency).upper()
        subtotal = quantize_money(self._parse_amount(amount), currency)
        if subtotal <= ZERO:
            # Positive but below the currency's smallest unit
            raise InvalidAmountError(amount)

        rate = self.get_commission_rate(transaction_type, percentage_tier)

        platform_fee = quantize_money(subtotal * rate, currency)
        processing_fee = quantize_money(
            subtotal * self.config.processing_rate + self.get_fixed_fee_for_currency(currency),
            currency,
        )

        if self.config.absorption is FeeAbsorption.CREATOR:
            # Small payments can't cover the flat fee; never pay out a negative amount
            processing_fee = min(processing_fee, subtotal - platform_fee)
            creator_payout = subtotal - platform_fee - processing_fee
            total = subtotal
        else:
            creator_payout = subtotal - platform_fee
            total = subtotal + processing_fee

        return FeeBreakdown(
            subtotal=subtotal,
            platform_fee=platform_fee,
            payment_processing_fee=processing_fee,
            total_fees=platform_fee + processing_fee,
            creator_payout=creator_payout,
            total=total,
            currency=currency,
            transaction_type=transaction_type,
            platform_fee_rate=rate,
            absorption=self.config.absorption,
        )

    # -------------------------------------------------------------------------
    # Per-transaction Shorthands
    # -------------------------------------------------------------------------

    def calculate_marketplace_fee(
        self, amount: Any, percentage_tier: str | None = None, currency: str | None = None
    ) -> FeeBreakdown:
        return self.calculate_fee(amount, TransactionType.MARKETPLACE, currency, percentage_tier)

    def calculate_digital_product_fee(
        self, amount: Any, percentage_tier: str | None = None, currency: str | None = None
    ) -> FeeBreakdown:
        return self.calculate_fee(amount, TransactionType.DIGITAL_PRODUCT, currency, percentage_tier)

    def calculate_service_booking_fee(
        self, amount: Any, percentage_tier: str | None = None, currency: str | None = None
    ) -> FeeBreakdown:
        return self.calculate_fee(amount, TransactionType.SERVICE_BOOKING, currency, percentage_tier)

    def calculate_commission_fee(
        self, amount: Any, percentage_tier: str | None = None, currency: str | None = None
    ) -> FeeBreakdown:
        return self.calculate_fee(amount, TransactionType.COMMISSION_WORK, currency, percentage_tier)

    def calculate_subscription_fee(self, amount: Any, currency: str | None = None) -> FeeBreakdown:
        """Recurring revenue gets a flat lower rate, independent of tier."""
        return self.calculate_fee(amount, TransactionType.SUBSCRIPTION, currency)

    def calculate_tip_fee(self, amount: Any, currency: str | None = None) -> FeeBreakdown:
        """Tips carry the smallest commission to encourage giving."""
        return self.calculate_fee(amount, TransactionType.TIP, currency)


# Shared instance configured from the environment
platform_fees = PlatformFeeService()
