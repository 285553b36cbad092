"""Category navigation routes, plus category and brand product listings."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from libs.db.session import get_async_db
from services.storefront_service.routers._helpers import ok, product_filters
from services.storefront_service.schemas import (
    ApiResponse,
    CategoryDetail,
    CategoryResponse,
    CategoryWithChildren,
    ProductFilters,
    ProductSearchResult,
)
from services.storefront_service.services.category_service import (
    get_categories,
    get_category_by_slug,
    get_featured_categories,
    search_categories,
)
from services.storefront_service.services.product_service import (
    get_products_by_brand,
    get_products_by_category,
)
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["categories"])


# ============================================================================
# CATEGORIES
# ============================================================================


@router.get("/categories", response_model=ApiResponse[list[CategoryWithChildren]])
async def list_categories(
    q: Optional[str] = Query(None, description="Filter categories by name"),
    db: AsyncSession = Depends(get_async_db),
):
    """Top-level categories with their children, or a flat name search."""
    if q and q.strip():
        matches = await search_categories(db, q.strip())
        return ok([CategoryWithChildren(**c.model_dump()) for c in matches])
    return ok(await get_categories(db))


@router.get("/categories/featured", response_model=ApiResponse[list[CategoryResponse]])
async def list_featured_categories(
    limit: int = Query(8, ge=1, le=50),
    db: AsyncSession = Depends(get_async_db),
):
    return ok(await get_featured_categories(db, limit))


@router.get("/categories/{slug}", response_model=ApiResponse[CategoryDetail])
async def get_category(
    slug: str,
    db: AsyncSession = Depends(get_async_db),
):
    """Category by slug with children and root-first breadcrumbs."""
    detail = await get_category_by_slug(db, slug)
    if detail is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return ok(detail)


@router.get(
    "/categories/{slug}/products", response_model=ApiResponse[ProductSearchResult]
)
async def list_category_products(
    slug: str,
    filters: ProductFilters = Depends(product_filters),
    db: AsyncSession = Depends(get_async_db),
):
    return ok(await get_products_by_category(db, slug, filters))


# ============================================================================
# BRANDS
# ============================================================================


@router.get("/brands/{slug}/products", response_model=ApiResponse[ProductSearchResult])
async def list_brand_products(
    slug: str,
    filters: ProductFilters = Depends(product_filters),
    db: AsyncSession = Depends(get_async_db),
):
    return ok(await get_products_by_brand(db, slug, filters))
