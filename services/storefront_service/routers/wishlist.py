"""Wishlist routes for signed-in customers."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from libs.auth.dependencies import get_current_user
from libs.auth.models import AuthUser
from libs.db.session import get_async_db
from services.storefront_service.routers._helpers import ok
from services.storefront_service.schemas import (
    ApiResponse,
    WishlistAddRequest,
    WishlistItemResponse,
)
from services.storefront_service.services.wishlist_service import (
    add_to_wishlist,
    get_wishlist,
    remove_from_wishlist,
)
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def _require_product_id(product_id: Optional[uuid.UUID]) -> uuid.UUID:
    if product_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Product ID is required"
        )
    return product_id


@router.get("", response_model=ApiResponse[list[WishlistItemResponse]])
async def list_wishlist(
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    items = await get_wishlist(db, current_user.user_id)
    return ok([WishlistItemResponse.model_validate(i) for i in items])


@router.post(
    "",
    response_model=ApiResponse[WishlistItemResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_wishlist_item(
    payload: WishlistAddRequest,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    product_id = _require_product_id(payload.product_id)
    item = await add_to_wishlist(db, current_user.user_id, product_id)
    return ok(
        WishlistItemResponse.model_validate(item),
        message="Product added to wishlist",
    )


@router.delete("", response_model=ApiResponse[None])
async def remove_wishlist_item(
    product_id: Optional[uuid.UUID] = Query(None),
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    await remove_from_wishlist(
        db, current_user.user_id, _require_product_id(product_id)
    )
    return ok(message="Product removed from wishlist")
