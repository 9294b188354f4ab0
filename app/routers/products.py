# =============================================================================
# app/routers/products.py - Marketplace Product Endpoints
# =============================================================================
# Listing is public. Creating checks the seller's plan limit first and
# answers 403 with the limit when the plan is full.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import get_current_user, AuthUser
from core.models import ProductCreate
from core.services.product_service import ProductService

router = APIRouter()


@router.get("")
async def list_products(
    category: Annotated[str | None, Query(description="Filter by category")] = None,
    location: Annotated[str | None, Query(description="Filter by location")] = None,
    creator_id: Annotated[UUID | None, Query(description="Only this seller's products")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=100)] = 20,
):
    """List active products, newest first."""
    products = ProductService.list_resources(
        creator_id=creator_id,
        page=page,
        page_size=page_size,
        category=category,
        location=location,
        is_active=True,
    )
    return {"products": products, "page": page, "page_size": page_size}


@router.get("/{product_id}")
async def get_product(
    product_id: Annotated[UUID, Path(description="Product UUID")],
):
    return ProductService.get(product_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    request: ProductCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a product.

    Returns 403 PRODUCT_LIMIT_REACHED when the seller's plan is full.
    """
    return ProductService.create(user.id, request)


@router.delete("/{product_id}")
async def delete_product(
    product_id: Annotated[UUID, Path(description="Product UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """Delete one of your own products."""
    ProductService.delete(product_id, user.id)
    return {"product_id": str(product_id), "message": "Product deleted successfully"}
