# =============================================================================
# core/models/fees.py - Fee Breakdown Schemas
# =============================================================================
# A FeeBreakdown is what the platform takes from one transaction.
# Monetary fields are Decimal and serialize to JSON strings so clients never
# see binary float artefacts.
# =============================================================================

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TransactionType(str, Enum):
    """Kinds of payment the platform takes a commission on."""
    MARKETPLACE = "marketplace"
    DIGITAL_PRODUCT = "digital_product"
    SERVICE_BOOKING = "service_booking"
    COMMISSION_WORK = "commission_work"
    SUBSCRIPTION = "subscription"
    TIP = "tip"


class FeeAbsorption(str, Enum):
    """
    Who bears the payment processing fee.

    - creator: deducted from the payout, buyer pays the list price
    - buyer: added on top of the list price, payout untouched
    """
    CREATOR = "creator"
    BUYER = "buyer"


class FeeBreakdown(BaseModel):
    """
    Split of one transaction between platform, processor and creator.

    Example (tip of USD 100, creator absorbs processing):
        {
            "subtotal": "100.00",
            "platform_fee": "3.00",
            "payment_processing_fee": "2.70",
            "total_fees": "5.70",
            "creator_payout": "94.30",
            "total": "100.00",
            "currency": "USD"
        }
    """

    model_config = ConfigDict(frozen=True)

    subtotal: Decimal
    platform_fee: Decimal
    payment_processing_fee: Decimal
    total_fees: Decimal
    creator_payout: Decimal
    total: Decimal = Field(..., description="What the buyer is charged")
    currency: str
    transaction_type: TransactionType
    platform_fee_rate: Decimal
    absorption: FeeAbsorption

    def to_audit_row(self) -> dict[str, str]:
        """Columns for the platform_fees audit table."""
        return {
            "subtotal": str(self.subtotal),
            "platform_fee": str(self.platform_fee),
            "payment_processing_fee": str(self.payment_processing_fee),
            "total_fees": str(self.total_fees),
            "creator_payout": str(self.creator_payout),
        }
