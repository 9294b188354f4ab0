# =============================================================================
# tests/test_entitlement_service.py - Resource Limit Check Tests
# =============================================================================
# This module contains tests for:
# - Limited tiers: count compared with the limit (strictly less than)
# - Unlimited tiers: no count query at all
# - Fail-open behaviour on database errors
# =============================================================================

import pytest

from core.models import ResourceKind
from core.services.entitlement_service import EntitlementService
from lib.supabase_client import SupabaseClientError


class TestLimitedTiers:
    """Free/basic plans: 5 products, 3 portfolios."""

    @pytest.mark.parametrize("count,expected", [
        (0, True),
        (4, True),
        (5, False),
        (9, False),
    ])
    def test_product_limit_boundary(self, mock_supabase, user_id, count, expected):
        mock_supabase.count_owned_rows.return_value = count

        result = EntitlementService.check_product_limit(user_id)

        assert result.can_create is expected
        assert result.limit == 5
        assert result.current_count == count
        assert result.fail_open is False

    def test_portfolio_limit_counts_portfolios_table(self, mock_supabase, user_id):
        mock_supabase.count_owned_rows.return_value = 3

        result = EntitlementService.check_portfolio_limit(user_id)

        mock_supabase.count_owned_rows.assert_called_once_with("portfolios", user_id)
        assert result.can_create is False
        assert result.limit == 3

    def test_product_check_counts_products_table(self, mock_supabase, user_id):
        EntitlementService.check_limit(user_id, "product")

        mock_supabase.count_owned_rows.assert_called_once_with("products", user_id)

    def test_basic_percentage_tier_is_limited(self, mock_supabase, user_id, subscription_row):
        mock_supabase.fetch_subscription.return_value = subscription_row(
            pricing_model="percentage", percentage_tier="basic"
        )
        mock_supabase.count_owned_rows.return_value = 2

        result = EntitlementService.check_portfolio_limit(user_id)

        assert result.can_create is True
        assert result.tier == "basic"

    def test_unknown_tier_uses_free_limits(self, mock_supabase, user_id, subscription_row):
        mock_supabase.fetch_subscription.return_value = subscription_row(tier="diamond")
        mock_supabase.count_owned_rows.return_value = 5

        result = EntitlementService.check_product_limit(user_id)

        assert result.limit == 5
        assert result.can_create is False


class TestUnlimitedTiers:

    @pytest.mark.parametrize("tier", ["creator", "professional", "enterprise"])
    def test_subscription_tiers_skip_count(self, mock_supabase, user_id, subscription_row, tier):
        mock_supabase.fetch_subscription.return_value = subscription_row(tier=tier)
        mock_supabase.count_owned_rows.return_value = 10_000

        for resource in ResourceKind:
            result = EntitlementService.check_limit(user_id, resource)
            assert result.can_create is True
            assert result.limit is None
            assert result.current_count == 0

        mock_supabase.count_owned_rows.assert_not_called()

    @pytest.mark.parametrize("tier", ["premium", "pro"])
    def test_percentage_tiers_skip_count(self, mock_supabase, user_id, subscription_row, tier):
        mock_supabase.fetch_subscription.return_value = subscription_row(
            pricing_model="percentage", percentage_tier=tier
        )

        result = EntitlementService.check_product_limit(user_id)

        assert result.is_unlimited is True
        mock_supabase.count_owned_rows.assert_not_called()


class TestFailOpen:

    def test_count_error_allows_creation(self, mock_supabase, user_id):
        mock_supabase.count_owned_rows.side_effect = SupabaseClientError("timeout")

        result = EntitlementService.check_product_limit(user_id)

        assert result.can_create is True
        assert result.current_count == 0
        assert result.fail_open is True

    def test_unexpected_error_allows_creation(self, mock_supabase, user_id):
        mock_supabase.count_owned_rows.side_effect = RuntimeError("boom")

        result = EntitlementService.check_portfolio_limit(user_id)

        assert result.can_create is True
        assert result.fail_open is True

    def test_subscription_error_allows_creation(self, mock_supabase, user_id):
        # A paid user over the free limit must not be blocked by a lookup error
        mock_supabase.fetch_subscription.side_effect = SupabaseClientError("timeout")
        mock_supabase.count_owned_rows.return_value = 10

        result = EntitlementService.check_product_limit(user_id)

        assert result.can_create is True
        assert result.current_count == 0
        assert result.fail_open is True
        mock_supabase.count_owned_rows.assert_not_called()

    def test_count_error_is_logged(self, mock_supabase, user_id, caplog):
        mock_supabase.count_owned_rows.side_effect = SupabaseClientError("timeout")

        with caplog.at_level("WARNING", logger="core.services.entitlement_service"):
            EntitlementService.check_product_limit(user_id)

        assert "allowing creation" in caplog.text


def test_unknown_resource_kind_is_rejected(mock_supabase, user_id):
    with pytest.raises(ValueError):
        EntitlementService.check_limit(user_id, "course")


class TestSummarize:

    def test_one_subscription_lookup_for_both_resources(self, mock_supabase, user_id, subscription_row):
        mock_supabase.fetch_subscription.return_value = subscription_row(
            pricing_model="percentage", percentage_tier="basic"
        )
        mock_supabase.count_owned_rows.side_effect = lambda table, _: {"products": 5, "portfolios": 1}[table]

        summary = EntitlementService.summarize(user_id)

        mock_supabase.fetch_subscription.assert_called_once_with(user_id)
        assert summary.tier == "basic"
        assert summary.pricing_model == "percentage"
        assert summary.products.can_create is False
        assert summary.portfolios.can_create is True

    def test_subscription_error_opens_both(self, mock_supabase, user_id):
        mock_supabase.fetch_subscription.side_effect = SupabaseClientError("timeout")

        summary = EntitlementService.summarize(user_id)

        assert summary.tier is None
        assert summary.products.fail_open is True
        assert summary.portfolios.fail_open is True
        mock_supabase.count_owned_rows.assert_not_called()
