# =============================================================================
# app/routers/subscriptions.py - Plans and Entitlements
# =============================================================================
# Public tier catalog plus the signed-in user's plan and remaining limits.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import get_current_user, AuthUser
from core.models import EntitlementSummary, TierDescription
from core.models.plan import describe_tiers
from core.services.entitlement_service import EntitlementService
from core.services.subscription_service import SubscriptionService

router = APIRouter()


@router.get("/tiers", response_model=list[TierDescription])
async def list_tiers():
    """
    All plans on both pricing tracks with their limits.

    A limit of -1 means unlimited.
    """
    return describe_tiers()


@router.get("/me")
async def get_my_subscription(user: AuthUser = Depends(get_current_user)):
    """
    The current user's subscription merged with its tier details.

    Users who never picked a plan get the free tier.
    """
    return SubscriptionService.get_subscription_overview(user.id)


@router.get("/me/limits", response_model=EntitlementSummary)
async def get_my_limits(user: AuthUser = Depends(get_current_user)):
    """Whether the user can create another product and another portfolio."""
    return EntitlementService.summarize(user.id)


@router.post("/cancel")
async def cancel_subscription(user: AuthUser = Depends(get_current_user)):
    """Cancel at the end of the current billing period."""
    subscription = SubscriptionService.cancel_subscription(user.id)
    return {
        "cancel_at_period_end": subscription.cancel_at_period_end,
        "current_period_end": subscription.current_period_end,
        "message": "Subscription will be cancelled at end of period",
    }
