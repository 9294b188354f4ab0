# =============================================================================
# core/services/tip_service.py - Tips to Creators
# =============================================================================
# Records a pending tip together with its platform_fees audit row.
# Collecting the money is the payment provider's job and happens elsewhere;
# this service only prices and records the tip.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from core.models.fees import FeeBreakdown
from core.models.plan import PaymentStatus
from core.models.resources import TipCreate
from core.services.fee_service import PlatformFeeService, platform_fees
from app.exceptions import CreatorNotFoundError

logger = logging.getLogger(__name__)


class TipService:
    """Service for sending and listing tips."""

    @staticmethod
    def send_tip(
        sender_id: UUID | str,
        payload: TipCreate,
        fees: PlatformFeeService | None = None,
    ) -> tuple[dict[str, Any], FeeBreakdown]:
        """
        Price a tip and record it as pending.

        Args:
            sender_id: The tipping user
            payload: Validated request body
            fees: Fee calculator override (defaults to the shared instance)

        Returns:
            Tuple of (tip row, fee breakdown)

        Raises:
            InvalidAmountError: If the amount isn't positive
            CreatorNotFoundError: If creator_id isn't a user
            SupabaseClientError: If any insert fails
        """
        fees = fees or platform_fees

        # Price first so a bad amount never costs a database round trip
        breakdown = fees.calculate_tip_fee(payload.amount, payload.currency)

        creator = SupabaseClient.fetch_row("users", payload.creator_id, columns="id")
        if creator is None:
            raise CreatorNotFoundError(str(payload.creator_id))

        tip = SupabaseClient.insert_row("tips", {
            "creator_id": str(payload.creator_id),
            "sender_id": None if payload.is_anonymous else str(sender_id),
            "amount": str(breakdown.total),
            "currency": breakdown.currency,
            "message": payload.message,
            "is_anonymous": payload.is_anonymous,
            "payment_status": PaymentStatus.PENDING.value,
        })

        audit = breakdown.to_audit_row()
        audit.update({
            "transaction_id": f"tip_{tip['id']}",
            "transaction_type": breakdown.transaction_type.value,
            "user_id": str(payload.creator_id),
            "buyer_id": str(sender_id),
            "status": PaymentStatus.PENDING.value,
        })
        SupabaseClient.insert_row("platform_fees", audit)

        logger.info(
            f"Recorded tip {tip['id']} of {breakdown.total} {breakdown.currency} "
            f"to creator {payload.creator_id} (platform fee {breakdown.platform_fee})"
        )
        return tip, breakdown

    @staticmethod
    def list_received(creator_id: UUID | str) -> list[dict[str, Any]]:
        """Tips received by a creator; anonymous senders are hidden."""
        tips = SupabaseClient.fetch_rows("tips", filters={"creator_id": str(creator_id)})
        for tip in tips:
            if tip.get("is_anonymous"):
                tip["sender_id"] = None
        return tips

    @staticmethod
    def list_sent(sender_id: UUID | str) -> list[dict[str, Any]]:
        """Tips sent by a user under their own name."""
        return SupabaseClient.fetch_rows("tips", filters={"sender_id": str(sender_id)})
