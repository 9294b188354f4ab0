# =============================================================================
# core/services/entitlement_service.py - Resource Limit Checks
# =============================================================================
# Decides whether a creator may publish one more product or portfolio.
#
# The check is fail-open: if the subscription lookup or the count query
# errors, creation is allowed and the error is logged. An infrastructure
# hiccup must never block a legitimate create.
#
# The check and the caller's insert are separate requests with no shared
# transaction, so concurrent creates can overshoot a limit. Limits are
# advisory.
# =============================================================================

import logging
from uuid import UUID

from lib.supabase_client import SupabaseClient
from core.models.entitlement import EntitlementResult, EntitlementSummary
from core.models.plan import UNLIMITED, ResourceKind, TierInfo
from core.services.subscription_service import SubscriptionService, resolve_tier_from_record

logger = logging.getLogger(__name__)


class EntitlementService:
    """Resource-limit checks against the user's resolved tier."""

    @staticmethod
    def _load_tier(user_id: UUID | str) -> TierInfo:
        # Unlike SubscriptionService.resolve_tier, store errors propagate so
        # the caller can fail open instead of applying free-tier limits
        record = SubscriptionService.get_subscription(user_id)
        return resolve_tier_from_record(record)

    @staticmethod
    def _evaluate(user_id: UUID | str, resource: ResourceKind, tier: TierInfo) -> EntitlementResult:
        limit = tier.limits.for_resource(resource)

        # Unlimited tiers skip the count query entirely
        if limit == UNLIMITED:
            return EntitlementResult.unlimited(resource, tier)

        current_count = SupabaseClient.count_owned_rows(resource.table, user_id)

        return EntitlementResult(
            resource=resource,
            can_create=current_count < limit,
            limit=limit,
            current_count=current_count,
            tier=tier.name,
        )

    @staticmethod
    def check_limit(
        user_id: UUID | str,
        resource: ResourceKind | str,
        tier: TierInfo | None = None,
    ) -> EntitlementResult:
        """
        Check whether the user may create another `resource`.

        Args:
            user_id: The creator's user id
            resource: ResourceKind or its value ("product", "portfolio")
            tier: Already-resolved tier; looked up when omitted

        Returns:
            EntitlementResult; never raises for database errors

        Raises:
            ValueError: If `resource` isn't a known resource kind
        """
        resource = ResourceKind(resource)

        try:
            if tier is None:
                tier = EntitlementService._load_tier(user_id)
            result = EntitlementService._evaluate(user_id, resource, tier)
        except Exception as e:
            logger.warning(
                f"Error checking {resource.value} limit for user {user_id}, allowing creation: {e}",
                exc_info=True,
            )
            return EntitlementResult.permissive_default(resource)

        if not result.can_create:
            logger.info(
                f"User {user_id} reached {resource.value} limit "
                f"({result.current_count}/{result.limit}, tier={result.tier})"
            )
        return result

    @staticmethod
    def check_product_limit(user_id: UUID | str) -> EntitlementResult:
        """Shorthand for check_limit(user_id, ResourceKind.PRODUCT)."""
        return EntitlementService.check_limit(user_id, ResourceKind.PRODUCT)

    @staticmethod
    def check_portfolio_limit(user_id: UUID | str) -> EntitlementResult:
        """Shorthand for check_limit(user_id, ResourceKind.PORTFOLIO)."""
        return EntitlementService.check_limit(user_id, ResourceKind.PORTFOLIO)

    @staticmethod
    def summarize(user_id: UUID | str) -> EntitlementSummary:
        """
        Limits for every resource kind, evaluated against one tier lookup.

        If the subscription can't be read, both resources get the
        permissive default and tier/pricing_model are None.
        """
        try:
            tier = EntitlementService._load_tier(user_id)
        except Exception as e:
            logger.warning(
                f"Error loading subscription for user {user_id}, allowing creation: {e}",
                exc_info=True,
            )
            return EntitlementSummary(
                products=EntitlementResult.permissive_default(ResourceKind.PRODUCT),
                portfolios=EntitlementResult.permissive_default(ResourceKind.PORTFOLIO),
            )

        return EntitlementSummary(
            tier=tier.name,
            pricing_model=tier.kind.value,
            products=EntitlementService.check_limit(user_id, ResourceKind.PRODUCT, tier=tier),
            portfolios=EntitlementService.check_limit(user_id, ResourceKind.PORTFOLIO, tier=tier),
        )
