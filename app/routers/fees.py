# =============================================================================
# app/routers/fees.py - Fee Quotes
# =============================================================================
# Lets the checkout page show the split before a payment is started.
# =============================================================================

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Query

from core.models import FeeBreakdown, TransactionType
from core.services.fee_service import platform_fees

router = APIRouter()


@router.get("/quote", response_model=FeeBreakdown)
async def quote_fee(
    amount: Annotated[Decimal, Query(description="Gross price, must be > 0")],
    transaction_type: Annotated[TransactionType, Query()] = TransactionType.MARKETPLACE,
    currency: Annotated[str | None, Query(min_length=3, max_length=3)] = None,
    percentage_tier: Annotated[str | None, Query(description="basic, premium or pro")] = None,
):
    """
    Fee breakdown for a prospective transaction.

    Example: GET /api/v1/fees/quote?amount=100&currency=USD&transaction_type=tip
    """
    return platform_fees.calculate_fee(
        amount,
        transaction_type,
        currency=currency,
        percentage_tier=percentage_tier,
    )
