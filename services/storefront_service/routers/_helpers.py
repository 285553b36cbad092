"""Shared helpers for storefront routers: envelopes and query parsing."""

import uuid
from decimal import Decimal
from typing import Any, Optional

from fastapi import HTTPException, Query, status
from services.storefront_service.models import Dosha
from services.storefront_service.schemas import (
    ApiResponse,
    PriceRange,
    ProductFilters,
    ProductSort,
)


def ok(data: Any = None, message: Optional[str] = None) -> ApiResponse:
    """Wrap a successful result in the response envelope."""
    return ApiResponse(success=True, data=data, message=message)


def _split(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def _parse_ids(value: Optional[str]) -> list[uuid.UUID]:
    try:
        return [uuid.UUID(part) for part in _split(value)]
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid brand id"
        )


def _parse_doshas(value: Optional[str]) -> list[Dosha]:
    try:
        return [Dosha(part.lower()) for part in _split(value)]
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid constitution"
        )


def product_filters(
    category: Optional[str] = Query(None, description="Category slug"),
    brands: Optional[str] = Query(None, description="Comma-separated brand ids"),
    q: Optional[str] = Query(None, description="Free-text search"),
    price_min: Optional[Decimal] = Query(None, alias="priceMin", ge=0),
    price_max: Optional[Decimal] = Query(None, alias="priceMax", ge=0),
    sort: ProductSort = Query(ProductSort.NAME),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    featured: bool = Query(False),
    in_stock: bool = Query(False, alias="inStock"),
    constitution: Optional[str] = Query(None, description="e.g. vata,pitta"),
    rating: Optional[Decimal] = Query(None, ge=0, le=5),
    prescription_required: Optional[bool] = Query(None, alias="prescriptionRequired"),
    type: Optional[str] = Query(None),
) -> ProductFilters:
    """Build ProductFilters from listing query parameters."""
    price_range = None
    if price_min is not None or price_max is not None:
        price_range = PriceRange(min=price_min, max=price_max)

    return ProductFilters(
        category=category,
        brand_ids=_parse_ids(brands),
        search=q,
        price_range=price_range,
        sort_by=sort,
        limit=limit,
        offset=offset,
        featured=featured,
        in_stock=in_stock,
        constitution=_parse_doshas(constitution),
        min_rating=rating,
        prescription_required=prescription_required,
        type=type,
    )
