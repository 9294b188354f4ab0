# =============================================================================
# tests/test_api.py - HTTP Route Tests
# =============================================================================
# Runs the FastAPI app in-process with TestClient. Authentication is
# overridden with a fixed user except in TestAuth, which signs real tokens.
# =============================================================================

import time
from uuid import UUID

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.auth import AuthUser, get_current_user
from app.config import settings
from app.main import app
from lib.supabase_client import SupabaseClientError

from tests.conftest import CREATOR_ID, USER_ID

PRODUCT_ID = "33333333-3333-4333-8333-333333333333"


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def auth_client(client):
    """TestClient where every request is made as USER_ID."""
    app.dependency_overrides[get_current_user] = lambda: AuthUser(
        id=UUID(USER_ID), email="seller@example.com"
    )
    try:
        yield client
    finally:
        app.dependency_overrides.pop(get_current_user, None)


PRODUCT_BODY = {"title": "Kitenge Tote Bag", "price": "25000", "category": "fashion"}


# =============================================================================
# Products / Portfolios
# =============================================================================

class TestProductRoutes:

    def test_create_product_at_limit_is_forbidden(self, auth_client, mock_supabase):
        mock_supabase.count_owned_rows.return_value = 5

        response = auth_client.post("/api/v1/products", json=PRODUCT_BODY)

        assert response.status_code == 403
        body = response.json()
        assert body["code"] == "PRODUCT_LIMIT_REACHED"
        assert "5 products" in body["detail"]
        assert body["details"]["limit"] == 5
        assert body["details"]["current_count"] == 5
        mock_supabase.insert_row.assert_not_called()

    def test_create_product_under_limit(self, auth_client, mock_supabase):
        mock_supabase.count_owned_rows.return_value = 4
        mock_supabase.insert_row.return_value = {"id": PRODUCT_ID, **PRODUCT_BODY}

        response = auth_client.post("/api/v1/products", json=PRODUCT_BODY)

        assert response.status_code == 201
        assert response.json()["id"] == PRODUCT_ID
        table, data = mock_supabase.insert_row.call_args.args
        assert table == "products"
        assert data["creator_id"] == USER_ID
        assert data["price"] == "25000"

    def test_unlimited_tier_creates_without_counting(self, auth_client, mock_supabase, subscription_row):
        mock_supabase.fetch_subscription.return_value = subscription_row(tier="professional")
        mock_supabase.insert_row.return_value = {"id": PRODUCT_ID}

        response = auth_client.post("/api/v1/products", json=PRODUCT_BODY)

        assert response.status_code == 201
        mock_supabase.count_owned_rows.assert_not_called()

    def test_limit_check_failure_still_creates(self, auth_client, mock_supabase):
        mock_supabase.count_owned_rows.side_effect = SupabaseClientError("timeout")
        mock_supabase.insert_row.return_value = {"id": PRODUCT_ID}

        response = auth_client.post("/api/v1/products", json=PRODUCT_BODY)

        assert response.status_code == 201

    def test_subscription_lookup_failure_still_creates(self, auth_client, mock_supabase):
        mock_supabase.fetch_subscription.side_effect = SupabaseClientError("timeout")
        mock_supabase.count_owned_rows.return_value = 10
        mock_supabase.insert_row.return_value = {"id": PRODUCT_ID}

        response = auth_client.post("/api/v1/products", json=PRODUCT_BODY)

        assert response.status_code == 201
        mock_supabase.insert_row.assert_called_once()

    def test_invalid_price(self, auth_client, mock_supabase):
        response = auth_client.post("/api/v1/products", json={**PRODUCT_BODY, "price": "0"})
        assert response.status_code == 422

    def test_create_requires_auth(self, client, mock_supabase):
        response = client.post("/api/v1/products", json=PRODUCT_BODY)
        assert response.status_code in (401, 403)

    def test_get_missing_product(self, client, mock_supabase):
        mock_supabase.fetch_row.return_value = None

        response = client.get(f"/api/v1/products/{PRODUCT_ID}")

        assert response.status_code == 404
        assert response.json()["code"] == "PRODUCT_NOT_FOUND"

    def test_list_products_filters_active(self, client, mock_supabase):
        mock_supabase.fetch_rows.return_value = []

        response = client.get("/api/v1/products?category=fashion&page=2&page_size=10")

        assert response.status_code == 200
        kwargs = mock_supabase.fetch_rows.call_args.kwargs
        assert kwargs["filters"] == {"category": "fashion", "is_active": True}
        assert kwargs["limit"] == 10
        assert kwargs["offset"] == 10

    def test_delete_someone_elses_product(self, auth_client, mock_supabase):
        mock_supabase.fetch_row.return_value = {"id": PRODUCT_ID, "creator_id": CREATOR_ID}

        response = auth_client.delete(f"/api/v1/products/{PRODUCT_ID}")

        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"
        mock_supabase.delete_row.assert_not_called()

    def test_delete_own_product(self, auth_client, mock_supabase):
        mock_supabase.fetch_row.return_value = {"id": PRODUCT_ID, "creator_id": USER_ID}

        response = auth_client.delete(f"/api/v1/products/{PRODUCT_ID}")

        assert response.status_code == 200
        mock_supabase.delete_row.assert_called_once()

    def test_database_error_is_502(self, client, mock_supabase):
        mock_supabase.fetch_rows.side_effect = SupabaseClientError("connection refused")

        response = client.get("/api/v1/products")

        assert response.status_code == 502
        assert response.json()["code"] == "DATABASE_ERROR"


class TestPortfolioRoutes:

    def test_create_portfolio_at_limit(self, auth_client, mock_supabase):
        mock_supabase.count_owned_rows.return_value = 3

        response = auth_client.post(
            "/api/v1/portfolios",
            json={"title": "Street shots", "category": "photography"},
        )

        assert response.status_code == 403
        assert response.json()["code"] == "PORTFOLIO_LIMIT_REACHED"
        mock_supabase.count_owned_rows.assert_called_once_with("portfolios", UUID(USER_ID))

    def test_create_portfolio(self, auth_client, mock_supabase):
        mock_supabase.count_owned_rows.return_value = 2
        mock_supabase.insert_row.return_value = {"id": PRODUCT_ID}

        response = auth_client.post(
            "/api/v1/portfolios",
            json={"title": "Street shots", "category": "photography", "tags": ["bw"]},
        )

        assert response.status_code == 201
        assert mock_supabase.insert_row.call_args.args[0] == "portfolios"


# =============================================================================
# Subscriptions
# =============================================================================

class TestSubscriptionRoutes:

    def test_tiers_are_public(self, client):
        response = client.get("/api/v1/subscriptions/tiers")

        assert response.status_code == 200
        tiers = response.json()
        assert len(tiers) == 7
        free = next(t for t in tiers if t["tier"] == "free")
        assert free["limits"] == {"products": 5, "portfolios": 3}

    def test_my_subscription_defaults_to_free(self, auth_client, mock_supabase):
        response = auth_client.get("/api/v1/subscriptions/me")

        assert response.status_code == 200
        assert response.json()["tier"] == "free"

    def test_my_limits(self, auth_client, mock_supabase):
        mock_supabase.count_owned_rows.side_effect = lambda table, _: {"products": 5, "portfolios": 1}[table]

        response = auth_client.get("/api/v1/subscriptions/me/limits")

        assert response.status_code == 200
        body = response.json()
        assert body["tier"] == "free"
        assert body["products"]["can_create"] is False
        assert body["portfolios"]["can_create"] is True
        assert body["portfolios"]["current_count"] == 1
        mock_supabase.fetch_subscription.assert_called_once()

    def test_my_limits_when_subscription_unreadable(self, auth_client, mock_supabase):
        mock_supabase.fetch_subscription.side_effect = SupabaseClientError("timeout")

        response = auth_client.get("/api/v1/subscriptions/me/limits")

        assert response.status_code == 200
        body = response.json()
        assert body["tier"] is None
        assert body["products"]["can_create"] is True
        assert body["products"]["fail_open"] is True

    def test_cancel_without_subscription(self, auth_client, mock_supabase):
        mock_supabase.update_subscription.return_value = None

        response = auth_client.post("/api/v1/subscriptions/cancel")

        assert response.status_code == 404
        assert response.json()["code"] == "SUBSCRIPTION_NOT_FOUND"


# =============================================================================
# Fees / Tips
# =============================================================================

class TestFeeRoutes:

    def test_quote(self, client):
        response = client.get(
            "/api/v1/fees/quote",
            params={"amount": "100", "currency": "USD", "transaction_type": "tip"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["platform_fee"] == "3.00"
        assert body["payment_processing_fee"] == "2.70"
        assert body["creator_payout"] == "94.30"

    def test_quote_rejects_zero(self, client):
        response = client.get("/api/v1/fees/quote", params={"amount": "0"})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_AMOUNT"

    def test_quote_rejects_unknown_type(self, client):
        response = client.get(
            "/api/v1/fees/quote",
            params={"amount": "100", "transaction_type": "refund"},
        )
        assert response.status_code == 422


class TestTipRoutes:

    def test_tip_to_unknown_creator(self, auth_client, mock_supabase):
        mock_supabase.fetch_row.return_value = None

        response = auth_client.post(
            "/api/v1/tips",
            json={"creator_id": CREATOR_ID, "amount": "100", "currency": "USD"},
        )

        assert response.status_code == 404
        assert response.json()["code"] == "CREATOR_NOT_FOUND"
        mock_supabase.insert_row.assert_not_called()

    def test_send_tip_records_tip_and_fee(self, auth_client, mock_supabase):
        mock_supabase.fetch_row.return_value = {"id": CREATOR_ID}
        mock_supabase.insert_row.side_effect = [
            {"id": "tip-1", "payment_status": "pending"},
            {"id": "fee-1"},
        ]

        response = auth_client.post(
            "/api/v1/tips",
            json={"creator_id": CREATOR_ID, "amount": "100", "currency": "USD", "message": "asante"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["tip_id"] == "tip-1"
        assert body["fees"]["creator_payout"] == "94.30"

        (tip_table, tip), (fee_table, audit) = [c.args for c in mock_supabase.insert_row.call_args_list]
        assert tip_table == "tips"
        assert tip["amount"] == "100.00"
        assert tip["sender_id"] == USER_ID
        assert fee_table == "platform_fees"
        assert audit["transaction_id"] == "tip_tip-1"
        assert audit["platform_fee"] == "3.00"

    def test_anonymous_tip_hides_sender(self, auth_client, mock_supabase):
        mock_supabase.fetch_row.return_value = {"id": CREATOR_ID}
        mock_supabase.insert_row.side_effect = [{"id": "tip-2"}, {"id": "fee-2"}]

        auth_client.post(
            "/api/v1/tips",
            json={"creator_id": CREATOR_ID, "amount": "5000", "is_anonymous": True},
        )

        tip = mock_supabase.insert_row.call_args_list[0].args[1]
        assert tip["sender_id"] is None
        assert tip["currency"] == "TZS"

    def test_negative_tip(self, auth_client, mock_supabase):
        response = auth_client.post(
            "/api/v1/tips",
            json={"creator_id": CREATOR_ID, "amount": "-1"},
        )

        assert response.status_code == 400
        mock_supabase.fetch_row.assert_not_called()


# =============================================================================
# Auth / Health
# =============================================================================

def _token(sub=USER_ID, **claims):
    payload = {
        "sub": sub,
        "aud": "authenticated",
        "exp": int(time.time()) + 3600,
        "email": "seller@example.com",
        "app_metadata": {"roles": ["seller"]},
        **claims,
    }
    return jwt.encode(payload, settings.SUPABASE_JWT_SECRET, algorithm="HS256")


class TestAuth:

    def test_verify_valid_token(self, client):
        response = client.get(
            "/api/v1/auth/verify",
            headers={"Authorization": f"Bearer {_token()}"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "valid": True,
            "user_id": USER_ID,
            "email": "seller@example.com",
            "roles": ["seller"],
        }

    def test_expired_token(self, client):
        token = _token(exp=int(time.time()) - 10)

        response = client.get("/api/v1/auth/verify", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"

    def test_wrong_audience(self, client):
        token = _token(aud="anon")

        response = client.get("/api/v1/auth/verify", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_profile_falls_back_to_token(self, client, mock_supabase):
        mock_supabase.fetch_rows.side_effect = SupabaseClientError("down")

        response = client.get(
            "/api/v1/auth/me",
            headers={"Authorization": f"Bearer {_token()}"},
        )

        assert response.status_code == 200
        assert response.json()["id"] == USER_ID
        assert response.json()["display_name"] is None


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
