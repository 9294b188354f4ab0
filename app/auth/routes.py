# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Signup/login happen client-side with Supabase Auth; these routes only
# describe the user behind a token.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser, ProfileResponse
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=ProfileResponse)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> ProfileResponse:
    """
    Get the current user's profile.

    Falls back to the token's id and email when the profile row hasn't
    been created yet.
    """
    try:
        rows = SupabaseClient.fetch_rows(
            "profiles",
            filters={"user_id": str(user.id)},
            limit=1,
        )
    except SupabaseClientError as e:
        logger.warning(f"Could not fetch profile for {user.id}: {e}")
        rows = []

    if rows:
        profile = rows[0]
        return ProfileResponse(
            id=user.id,
            email=user.email,
            display_name=profile.get("display_name"),
            avatar_url=profile.get("avatar_url"),
            location=profile.get("location"),
            bio=profile.get("bio"),
            created_at=profile.get("created_at"),
        )

    return ProfileResponse(id=user.id, email=user.email)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """Confirm a stored token is still valid."""
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email,
        "roles": list(user.roles),
    }
