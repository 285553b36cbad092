"""Product catalog routes: listing, featured, detail with recommendations."""

from fastapi import APIRouter, Depends, HTTPException, Query
from libs.db.session import get_async_db
from services.storefront_service.routers._helpers import ok, product_filters
from services.storefront_service.schemas import (
    ApiResponse,
    ProductFilters,
    ProductSearchResult,
    ProductSummary,
    ProductWithRecommendations,
)
from services.storefront_service.services.product_service import (
    get_featured_products,
    get_product_by_slug,
    get_products,
    get_recommendations,
)
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ApiResponse[ProductSearchResult])
async def list_products(
    filters: ProductFilters = Depends(product_filters),
    db: AsyncSession = Depends(get_async_db),
):
    """List active products with filters, sorting and facet counts."""
    return ok(await get_products(db, filters))


@router.get("/featured", response_model=ApiResponse[list[ProductSummary]])
async def list_featured_products(
    limit: int = Query(8, ge=1, le=50),
    db: AsyncSession = Depends(get_async_db),
):
    return ok(await get_featured_products(db, limit))


@router.get("/{slug}", response_model=ApiResponse[ProductWithRecommendations])
async def get_product(
    slug: str,
    db: AsyncSession = Depends(get_async_db),
):
    """Get a product by slug along with up to four recommendations."""
    product = await get_product_by_slug(db, slug)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")

    recommendations = await get_recommendations(db, product.id)
    return ok(
        ProductWithRecommendations(product=product, recommendations=recommendations)
    )
