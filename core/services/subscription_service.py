# =============================================================================
# core/services/subscription_service.py - Subscription Resolver
# =============================================================================
# Maps a user to the plan that governs their limits.
#
# Resolution never fails: a missing row, an unknown tier name or a
# database error all resolve to the free tier. A user without a
# subscription record must still be able to use free-tier features.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from core.models.plan import (
    FREE_PLAN,
    PlanKind,
    SubscriptionRecord,
    TierInfo,
    describe_tiers,
    get_percentage_plan,
    get_subscription_plan,
)
from app.exceptions import SubscriptionNotFoundError

logger = logging.getLogger(__name__)


def resolve_tier_from_record(record: SubscriptionRecord | None) -> TierInfo:
    """
    Resolve a subscription row to a TierInfo without touching the database.

    - No record: free tier
    - pricing_model == "percentage": look up percentage_tier
    - otherwise: look up tier
    Unknown names fall back to the free tier.
    """
    if record is None:
        return TierInfo.from_plan(FREE_PLAN, is_default=True)

    if record.pricing_model == PlanKind.PERCENTAGE.value:
        plan = get_percentage_plan(record.percentage_tier)
        requested = record.percentage_tier
    else:
        plan = get_subscription_plan(record.tier)
        requested = record.tier

    if plan is None:
        logger.info(
            f"Unknown {record.pricing_model or 'subscription'} tier {requested!r} "
            f"for user {record.user_id}, using free tier"
        )
        return TierInfo.from_plan(FREE_PLAN, is_default=True)

    return TierInfo.from_plan(plan)


class SubscriptionService:
    """
    Service for reading and updating platform subscriptions.

    Every call goes to the database; nothing is cached between requests so
    a plan change is visible on the next call.
    """

    @staticmethod
    def get_subscription(user_id: UUID | str) -> SubscriptionRecord | None:
        """
        Fetch a user's subscription row.

        Returns:
            SubscriptionRecord, or None if the user has none

        Raises:
            SupabaseClientError: If the query fails
        """
        row = SupabaseClient.fetch_subscription(user_id)
        if row is None:
            return None
        return SubscriptionRecord.model_validate(row)

    @staticmethod
    def resolve_tier(user_id: UUID | str) -> TierInfo:
        """
        Resolve the user's current tier.

        Fail-open: any error while reading the subscription is logged and
        the free tier is returned.
        """
        try:
            record = SubscriptionService.get_subscription(user_id)
        except Exception as e:
            logger.warning(f"Could not load subscription for user {user_id}, using free tier: {e}")
            return TierInfo.from_plan(FREE_PLAN, is_default=True)

        return resolve_tier_from_record(record)

    @staticmethod
    def get_subscription_overview(user_id: UUID | str) -> dict[str, Any]:
        """
        Subscription row merged with the resolved tier, for GET /subscriptions/me.

        Users without a row get a synthetic active free-tier subscription.

        Raises:
            SupabaseClientError: If the query fails
        """
        record = SubscriptionService.get_subscription(user_id)
        tier = resolve_tier_from_record(record)
        catalog = {entry.tier: entry for entry in describe_tiers()}
        description = catalog.get(tier.name)

        if record is None:
            overview: dict[str, Any] = {
                "user_id": str(user_id),
                "tier": tier.name,
                "pricing_model": tier.kind.value,
                "status": "active",
            }
        else:
            overview = record.model_dump(mode="json")

        overview.update({
            "resolved_tier": tier.name,
            "name": description.name if description else tier.name,
            "features": description.features if description else [],
            "limits": tier.limits.model_dump(),
        })
        return overview

    @staticmethod
    def cancel_subscription(user_id: UUID | str) -> SubscriptionRecord:
        """
        Flag the subscription to end with the current billing period.

        Raises:
            SubscriptionNotFoundError: If the user has no subscription
            SupabaseClientError: If the update fails
        """
        row = SupabaseClient.update_subscription(user_id, {"cancel_at_period_end": True})
        if row is None:
            raise SubscriptionNotFoundError(str(user_id))

        logger.info(f"Subscription for user {user_id} set to cancel at period end")
        return SubscriptionRecord.model_validate(row)
