# =============================================================================
# core/models/resources.py - Product, Portfolio and Tip Schemas
# =============================================================================
# Request bodies for the creator-owned resources. Responses are the raw
# Supabase rows, so only inputs are modelled here.
# =============================================================================

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    """
    Body of POST /products.

    Example:
        {
            "title": "Kitenge Tote Bag",
            "price": "25000",
            "category": "fashion",
            "location": "Dar es Salaam",
            "stock_quantity": 12
        }
    """
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: Decimal = Field(..., gt=0)
    category: str = Field(..., min_length=1, max_length=100)
    location: str | None = None
    image_url: str | None = None
    stock_quantity: int = Field(default=0, ge=0)


class PortfolioCreate(BaseModel):
    """Body of POST /portfolios."""
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    category: str = Field(..., min_length=1, max_length=100)
    image_url: str | None = None
    file_url: str | None = None
    tags: list[str] = Field(default_factory=list)


class TipCreate(BaseModel):
    """
    Body of POST /tips.

    Amount validation (> 0) is left to the fee calculator so the error
    shape matches every other fee path.
    """
    creator_id: UUID
    amount: Decimal
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    message: str | None = Field(default=None, max_length=1000)
    is_anonymous: bool = False
