# =============================================================================
# core/services/resource_service.py - Creator-owned, Plan-limited Resources
# =============================================================================
# Products and portfolios share the same lifecycle:
#   check plan limit -> insert with creator_id -> owner-only delete
# Subclasses set `resource` and implement `_row_from_payload`.
# =============================================================================

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar
from uuid import UUID

from pydantic import BaseModel

from lib.supabase_client import SupabaseClient
from core.models.entitlement import EntitlementResult
from core.models.plan import ResourceKind
from core.services.entitlement_service import EntitlementService
from app.exceptions import LimitReachedError, ResourceForbiddenError, ResourceNotFoundError

logger = logging.getLogger(__name__)


class OwnedResourceService(ABC):
    """Shared CRUD for resources whose count is capped by the creator's plan."""

    resource: ClassVar[ResourceKind]

    def __init_subclass__(cls, **kwargs):
        # Subclasses are used through classmethods and never instantiated,
        # so ABC alone wouldn't catch a missing implementation
        super().__init_subclass__(**kwargs)
        if getattr(cls._row_from_payload, "__isabstractmethod__", False):
            raise TypeError(f"{cls.__name__} must implement _row_from_payload")

    @classmethod
    @abstractmethod
    def _row_from_payload(cls, payload: BaseModel) -> dict[str, Any]:
        """Columns to insert for a validated request body."""

    @classmethod
    def ensure_can_create(cls, user_id: UUID | str) -> EntitlementResult:
        """
        Run the plan-limit check and raise if it denies creation.

        Raises:
            LimitReachedError: If the user is at or over their limit
        """
        entitlement = EntitlementService.check_limit(user_id, cls.resource)
        if not entitlement.can_create:
            raise LimitReachedError(
                resource=cls.resource.value,
                limit=entitlement.limit,
                current_count=entitlement.current_count,
            )
        return entitlement

    @classmethod
    def create(cls, user_id: UUID | str, payload: BaseModel) -> dict[str, Any]:
        """
        Create a resource owned by `user_id`.

        Raises:
            LimitReachedError: If the plan doesn't allow another one
            SupabaseClientError: If the insert fails
        """
        cls.ensure_can_create(user_id)

        data = cls._row_from_payload(payload)
        data["creator_id"] = str(user_id)

        row = SupabaseClient.insert_row(cls.resource.table, data)
        logger.info(f"Created {cls.resource.value} {row.get('id')} for creator {user_id}")
        return row

    @classmethod
    def get(cls, resource_id: UUID | str) -> dict[str, Any]:
        """
        Raises:
            ResourceNotFoundError: If no row has this id
        """
        row = SupabaseClient.fetch_row(cls.resource.table, resource_id)
        if row is None:
            raise ResourceNotFoundError(cls.resource.value, str(resource_id))
        return row

    @classmethod
    def list_resources(
        cls,
        creator_id: UUID | str | None = None,
        page: int = 1,
        page_size: int = 20,
        **filters: Any,
    ) -> list[dict[str, Any]]:
        """List rows newest first, optionally for one creator."""
        if creator_id:
            filters["creator_id"] = str(creator_id)
        filters = {k: v for k, v in filters.items() if v is not None}

        return SupabaseClient.fetch_rows(
            cls.resource.table,
            filters=filters,
            limit=page_size,
            offset=(page - 1) * page_size,
        )

    @classmethod
    def delete(cls, resource_id: UUID | str, user_id: UUID | str) -> None:
        """
        Delete a resource the user owns.

        Raises:
            ResourceNotFoundError: If no row has this id
            ResourceForbiddenError: If the user isn't the creator
        """
        row = cls.get(resource_id)
        if str(row.get("creator_id")) != str(user_id):
            raise ResourceForbiddenError(cls.resource.value, str(resource_id))

        SupabaseClient.delete_row(cls.resource.table, resource_id)
        logger.info(f"Deleted {cls.resource.value} {resource_id}")
