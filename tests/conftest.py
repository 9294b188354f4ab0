# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides a mocked SupabaseClient shared by every service module
# =============================================================================

import os
from unittest.mock import MagicMock, patch

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest

# Every module that talks to the database through SupabaseClient
SUPABASE_CONSUMERS = (
    "core.services.subscription_service.SupabaseClient",
    "core.services.entitlement_service.SupabaseClient",
    "core.services.resource_service.SupabaseClient",
    "core.services.tip_service.SupabaseClient",
    "app.auth.routes.SupabaseClient",
)

USER_ID = "11111111-1111-4111-8111-111111111111"
CREATOR_ID = "22222222-2222-4222-8222-222222222222"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def mock_supabase():
    """
    One MagicMock standing in for SupabaseClient everywhere.

    Defaults: no subscription row, zero owned rows.
    """
    mock = MagicMock()
    mock.fetch_subscription.return_value = None
    mock.count_owned_rows.return_value = 0

    patchers = [patch(target, mock) for target in SUPABASE_CONSUMERS]
    for patcher in patchers:
        patcher.start()
    try:
        yield mock
    finally:
        for patcher in reversed(patchers):
            patcher.stop()


@pytest.fixture
def user_id():
    return USER_ID


@pytest.fixture
def creator_id():
    return CREATOR_ID


@pytest.fixture
def subscription_row():
    """Factory for platform_subscriptions rows."""
    def _row(tier="free", pricing_model="subscription", percentage_tier=None, **extra):
        row = {
            "user_id": USER_ID,
            "tier": tier,
            "pricing_model": pricing_model,
            "percentage_tier": percentage_tier,
            "status": "active",
            "payment_status": "paid",
            "current_period_start": "2026-10-01T00:00:00+00:00",
            "current_period_end": "2026-11-01T00:00:00+00:00",
            "cancel_at_period_end": False,
        }
        row.update(extra)
        return row
    return _row
