# =============================================================================
# app/routers/portfolios.py - Creator Portfolio Endpoints
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import get_current_user, AuthUser
from core.models import PortfolioCreate
from core.services.portfolio_service import PortfolioService

router = APIRouter()


@router.get("")
async def list_portfolios(
    category: Annotated[str | None, Query(description="Filter by category")] = None,
    creator_id: Annotated[UUID | None, Query(description="Only this creator's work")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=100)] = 20,
):
    portfolios = PortfolioService.list_resources(
        creator_id=creator_id,
        page=page,
        page_size=page_size,
        category=category,
    )
    return {"portfolios": portfolios, "page": page, "page_size": page_size}


@router.get("/{portfolio_id}")
async def get_portfolio(
    portfolio_id: Annotated[UUID, Path(description="Portfolio UUID")],
):
    return PortfolioService.get(portfolio_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_portfolio(
    request: PortfolioCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a portfolio item.

    Returns 403 PORTFOLIO_LIMIT_REACHED when the creator's plan is full.
    """
    return PortfolioService.create(user.id, request)


@router.delete("/{portfolio_id}")
async def delete_portfolio(
    portfolio_id: Annotated[UUID, Path(description="Portfolio UUID")],
    user: AuthUser = Depends(get_current_user),
):
    PortfolioService.delete(portfolio_id, user.id)
    return {"portfolio_id": str(portfolio_id), "message": "Portfolio deleted successfully"}
