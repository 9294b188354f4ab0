# =============================================================================
# app/routers/tips.py - Tip Endpoints
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import get_current_user, AuthUser
from core.models import TipCreate
from core.services.tip_service import TipService

router = APIRouter()


@router.post("")
async def send_tip(
    request: TipCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Record a tip to a creator.

    The response carries the fee breakdown; `fees.total` is what the
    sender will be charged.
    """
    tip, breakdown = TipService.send_tip(user.id, request)
    return {
        "tip_id": tip["id"],
        "payment_status": tip.get("payment_status"),
        "fees": breakdown.model_dump(mode="json"),
        "message": "Tip recorded, awaiting payment",
    }


@router.get("/received")
async def tips_received(user: AuthUser = Depends(get_current_user)):
    return TipService.list_received(user.id)


@router.get("/sent")
async def tips_sent(user: AuthUser = Depends(get_current_user)):
    return TipService.list_sent(user.id)
