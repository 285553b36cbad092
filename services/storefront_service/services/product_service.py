"""Catalog queries: filtered listings, product detail, recommendations."""

import uuid
from typing import Optional

from fastapi import HTTPException, status
from libs.common.logging import get_logger
from services.storefront_service.models import (
    Brand,
    Category,
    Product,
    ProductCategory,
    ProductDosha,
    ProductRecommendation,
    ProductStatus,
    ProductView,
)
from services.storefront_service.schemas import (
    FacetCount,
    FilterFacets,
    PriceBounds,
    ProductDetail,
    ProductFilters,
    ProductSearchResult,
    ProductSort,
    ProductSummary,
)
from services.storefront_service.services._helpers import (
    backend_errors,
    escape_like,
    product_card_options,
    product_detail_options,
)
from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

DEFAULT_RECOMMENDATION_LIMIT = 4
DEFAULT_FEATURED_LIMIT = 8


# ============================================================================
# QUERY BUILDING
# ============================================================================


def apply_filters(query: Select, filters: ProductFilters) -> Select:
    """Narrow an active-product query by every filter that is set."""
    if filters.category_id:
        query = query.where(
            Product.id.in_(
                select(ProductCategory.product_id).where(
                    ProductCategory.category_id == filters.category_id
                )
            )
        )

    if filters.category:
        query = query.where(
            Product.id.in_(
                select(ProductCategory.product_id)
                .join(Category, Category.id == ProductCategory.category_id)
                .where(Category.slug == filters.category)
            )
        )

    if filters.brand_ids:
        query = query.where(Product.brand_id.in_(filters.brand_ids))

    if filters.price_range:
        if filters.price_range.min is not None:
            query = query.where(Product.selling_price >= filters.price_range.min)
        if filters.price_range.max is not None:
            query = query.where(Product.selling_price <= filters.price_range.max)

    if filters.search and filters.search.strip():
        term = f"%{escape_like(filters.search.strip())}%"
        query = query.where(
            or_(
                Product.name.ilike(term, escape="\\"),
                Product.short_description.ilike(term, escape="\\"),
                Product.description.ilike(term, escape="\\"),
                Product.search_keywords.ilike(term, escape="\\"),
            )
        )

    if filters.in_stock:
        query = query.where(Product.stock_quantity > 0)

    if filters.featured:
        query = query.where(Product.is_featured.is_(True))

    if filters.type:
        query = query.where(Product.type == filters.type)

    if filters.constitution:
        query = query.where(
            Product.id.in_(
                select(ProductDosha.product_id).where(
                    ProductDosha.dosha.in_(filters.constitution)
                )
            )
        )

    if filters.min_rating is not None:
        query = query.where(Product.average_rating >= filters.min_rating)

    if filters.prescription_required is not None:
        query = query.where(
            Product.is_prescription_required.is_(filters.prescription_required)
        )

    return query


def apply_sort(query: Select, sort_by: ProductSort) -> Select:
    """Order by the requested key; product name breaks ties."""
    if sort_by == ProductSort.PRICE_LOW:
        return query.order_by(Product.selling_price.asc(), Product.name)
    if sort_by == ProductSort.PRICE_HIGH:
        return query.order_by(Product.selling_price.desc(), Product.name)
    if sort_by == ProductSort.RATING:
        return query.order_by(Product.average_rating.desc().nulls_last(), Product.name)
    if sort_by == ProductSort.NEWEST:
        return query.order_by(Product.created_at.desc(), Product.name)
    if sort_by == ProductSort.FEATURED:
        return query.order_by(Product.is_featured.desc(), Product.name)
    return query.order_by(Product.name.asc())


def _active_products() -> Select:
    return select(Product).where(Product.status == ProductStatus.ACTIVE)


# ============================================================================
# LISTINGS
# ============================================================================


async def get_products(
    db: AsyncSession, filters: Optional[ProductFilters] = None
) -> ProductSearchResult:
    """Filtered, sorted, offset-paginated product listing with facet counts."""
    filters = filters or ProductFilters()

    with backend_errors("Failed to fetch products"):
        query = apply_filters(_active_products(), filters)

        count_query = select(func.count()).select_from(query.subquery())
        total = (await db.execute(count_query)).scalar() or 0

        query = apply_sort(query, filters.sort_by)
        query = query.options(*product_card_options())
        query = query.offset(filters.offset).limit(filters.limit)

        result = await db.execute(query)
        products = result.scalars().all()

    facets = await get_filter_facets(db)

    return ProductSearchResult(
        products=[ProductSummary.model_validate(p) for p in products],
        total=total,
        filters=facets,
    )


async def search_products(
    db: AsyncSession, query: str, filters: Optional[ProductFilters] = None
) -> ProductSearchResult:
    """Free-text search; other filters still apply."""
    filters = (filters or ProductFilters()).model_copy(update={"search": query})
    return await get_products(db, filters)


async def get_featured_products(
    db: AsyncSession, limit: int = DEFAULT_FEATURED_LIMIT
) -> list[ProductSummary]:
    """Newest featured products first."""
    with backend_errors("Failed to fetch featured products"):
        query = (
            _active_products()
            .where(Product.is_featured.is_(True))
            .order_by(Product.created_at.desc())
            .options(*product_card_options())
            .limit(limit)
        )
        result = await db.execute(query)
        return [ProductSummary.model_validate(p) for p in result.scalars().all()]


async def get_products_by_category(
    db: AsyncSession, category_slug: str, filters: Optional[ProductFilters] = None
) -> ProductSearchResult:
    with backend_errors("Failed to fetch products"):
        category_id = (
            await db.execute(select(Category.id).where(Category.slug == category_slug))
        ).scalar_one_or_none()
    if category_id is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Category not found"
        )

    filters = (filters or ProductFilters()).model_copy(
        update={"category_id": category_id, "category": None}
    )
    return await get_products(db, filters)


async def get_products_by_brand(
    db: AsyncSession, brand_slug: str, filters: Optional[ProductFilters] = None
) -> ProductSearchResult:
    with backend_errors("Failed to fetch products"):
        brand_id = (
            await db.execute(select(Brand.id).where(Brand.slug == brand_slug))
        ).scalar_one_or_none()
    if brand_id is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Brand not found"
        )

    filters = (filters or ProductFilters()).model_copy(
        update={"brand_ids": [brand_id]}
    )
    return await get_products(db, filters)


# ============================================================================
# FACETS
# ============================================================================


async def get_filter_facets(db: AsyncSession) -> FilterFacets:
    """Brand/category counts and price bounds over the active catalog.

    Facets only decorate a listing, so a failure here is logged and the
    listing is returned with empty facets instead.
    """
    try:
        brand_rows = await db.execute(
            select(Brand.id, Brand.name, func.count(Product.id))
            .outerjoin(
                Product,
                (Product.brand_id == Brand.id)
                & (Product.status == ProductStatus.ACTIVE),
            )
            .where(Brand.is_active.is_(True))
            .group_by(Brand.id, Brand.name)
            .order_by(Brand.name)
        )
        category_rows = await db.execute(
            select(Category.id, Category.name, func.count(Product.id))
            .outerjoin(ProductCategory, ProductCategory.category_id == Category.id)
            .outerjoin(
                Product,
                (Product.id == ProductCategory.product_id)
                & (Product.status == ProductStatus.ACTIVE),
            )
            .where(Category.is_active.is_(True))
            .group_by(Category.id, Category.name)
            .order_by(Category.name)
        )
        price_row = (
            await db.execute(
                select(
                    func.min(Product.selling_price), func.max(Product.selling_price)
                ).where(Product.status == ProductStatus.ACTIVE)
            )
        ).one()
    except SQLAlchemyError:
        logger.exception("Error fetching filter aggregations")
        return FilterFacets()

    low, high = price_row
    return FilterFacets(
        brands=[FacetCount(id=i, name=n, count=c) for i, n, c in brand_rows],
        categories=[FacetCount(id=i, name=n, count=c) for i, n, c in category_rows],
        price_range=(
            PriceBounds(min=low, max=high) if low is not None else PriceBounds()
        ),
    )


# ============================================================================
# DETAIL & RECOMMENDATIONS
# ============================================================================


async def get_product_by_slug(db: AsyncSession, slug: str) -> Optional[ProductDetail]:
    """Active product by slug, or None. Each hit is logged as a product view."""
    with backend_errors("Failed to fetch product"):
        query = (
            _active_products()
            .where(Product.slug == slug)
            .options(*product_detail_options())
        )
        product = (await db.execute(query)).scalar_one_or_none()

    if product is None:
        return None

    detail = ProductDetail.model_validate(product)
    await log_product_view(db, product.id)
    return detail


async def log_product_view(db: AsyncSession, product_id: uuid.UUID) -> None:
    """Record a detail view; analytics must never break the page."""
    try:
        db.add(ProductView(product_id=product_id))
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.warning("Failed to log product view for %s", product_id, exc_info=True)


async def get_recommendations(
    db: AsyncSession, product_id: uuid.UUID, limit: int = DEFAULT_RECOMMENDATION_LIMIT
) -> list[ProductSummary]:
    """Scored recommendations, falling back to products from the same category.

    Returns an empty list on backend failure.
    """
    try:
        query = (
            select(Product)
            .join(
                ProductRecommendation,
                ProductRecommendation.recommended_product_id == Product.id,
            )
            .where(
                ProductRecommendation.source_product_id == product_id,
                Product.status == ProductStatus.ACTIVE,
            )
            .order_by(ProductRecommendation.score.desc())
            .options(*product_card_options())
            .limit(limit)
        )
        recommended = (await db.execute(query)).scalars().all()
        if recommended:
            return [ProductSummary.model_validate(p) for p in recommended]

        category_id = (
            await db.execute(
                select(ProductCategory.category_id)
                .where(ProductCategory.product_id == product_id)
                .limit(1)
            )
        ).scalar_one_or_none()
        if category_id is None:
            return []

        similar = apply_filters(
            _active_products().where(Product.id != product_id),
            ProductFilters(category_id=category_id),
        )
        similar = similar.order_by(Product.name).options(*product_card_options())
        result = await db.execute(similar.limit(limit))
        return [ProductSummary.model_validate(p) for p in result.scalars().all()]
    except SQLAlchemyError:
        logger.exception("Error fetching recommendations for %s", product_id)
        return []
