# =============================================================================
# core/services/product_service.py - Marketplace Products
# =============================================================================

from typing import Any

from core.models.plan import ResourceKind
from core.models.resources import ProductCreate
from core.services.resource_service import OwnedResourceService


class ProductService(OwnedResourceService):
    """Products listed by sellers. Count capped by the seller's plan."""

    resource = ResourceKind.PRODUCT

    @classmethod
    def _row_from_payload(cls, payload: ProductCreate) -> dict[str, Any]:
        return {
            "title": payload.title,
            "description": payload.description,
            "price": str(payload.price),
            "category": payload.category,
            "location": payload.location,
            "image_url": payload.image_url,
            "stock_quantity": payload.stock_quantity,
        }
