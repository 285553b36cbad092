"""Product search routes."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from libs.db.session import get_async_db
from pydantic import ValidationError
from services.storefront_service.routers._helpers import ok
from services.storefront_service.schemas import (
    AdvancedSearchRequest,
    AdvancedSearchResult,
    ApiResponse,
    ProductFilters,
    QuickSearchResult,
)
from services.storefront_service.services.product_service import search_products
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=ApiResponse[QuickSearchResult])
async def quick_search(
    q: str = Query("", description="Search text"),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_async_db),
):
    """Search-as-you-type lookup over active products."""
    query = q.strip()
    if not query:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query is required",
        )

    result = await search_products(db, query, ProductFilters(limit=limit))
    return ok(
        QuickSearchResult(query=query, products=result.products, total=result.total)
    )


@router.post("", response_model=ApiResponse[AdvancedSearchResult])
async def advanced_search(
    payload: AdvancedSearchRequest,
    db: AsyncSession = Depends(get_async_db),
):
    """Search with the full filter set (camelCase keys accepted)."""
    query = (payload.query or "").strip()
    if not query:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query is required",
        )

    try:
        filters = ProductFilters.model_validate(payload.filters)
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid search filters",
        )

    result = await search_products(db, query, filters)
    return ok(AdvancedSearchResult(query=query, **result.model_dump()))
