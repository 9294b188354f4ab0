# =============================================================================
# core/services/portfolio_service.py - Creator Portfolios
# =============================================================================

from typing import Any

from core.models.plan import ResourceKind
from core.models.resources import PortfolioCreate
from core.services.resource_service import OwnedResourceService


class PortfolioService(OwnedResourceService):
    """Showcase pieces published by creators. Count capped by plan."""

    resource = ResourceKind.PORTFOLIO

    @classmethod
    def _row_from_payload(cls, payload: PortfolioCreate) -> dict[str, Any]:
        return {
            "title": payload.title,
            "description": payload.description,
            "category": payload.category,
            "image_url": payload.image_url,
            "file_url": payload.file_url,
            "tags": payload.tags,
        }
