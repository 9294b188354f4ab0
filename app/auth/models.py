# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    `roles` come from the token's app_metadata (e.g. "creator", "seller",
    "admin") and are informational; limits are driven by the subscription.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None
    roles: tuple[str, ...] = ()

    def has_role(self, role: str) -> bool:
        return role in self.roles


class ProfileResponse(BaseModel):
    """Public profile of the current user (profiles table)."""
    id: UUID
    email: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    created_at: Optional[datetime] = None
