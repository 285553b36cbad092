"""Server-side wishlist for signed-in customers."""

import uuid

from fastapi import HTTPException, status
from libs.common.logging import get_logger
from services.storefront_service.models import Product, WishlistItem
from services.storefront_service.services._helpers import (
    backend_errors,
    product_card_options,
)
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

logger = get_logger(__name__)


async def get_wishlist(db: AsyncSession, user_id: str) -> list[WishlistItem]:
    """Newest entries first, each with its product card loaded."""
    with backend_errors("Failed to fetch wishlist"):
        query = (
            select(WishlistItem)
            .where(WishlistItem.user_id == user_id)
            .order_by(WishlistItem.created_at.desc())
            .options(
                selectinload(WishlistItem.product).options(*product_card_options())
            )
        )
        return list((await db.execute(query)).scalars().all())


async def add_to_wishlist(
    db: AsyncSession, user_id: str, product_id: uuid.UUID
) -> WishlistItem:
    with backend_errors("Failed to add to wishlist"):
        if await db.get(Product, product_id) is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
            )

        existing = (
            await db.execute(
                select(WishlistItem.id).where(
                    WishlistItem.user_id == user_id,
                    WishlistItem.product_id == product_id,
                )
            )
        ).scalar_one_or_none()
        if existing is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Product already in wishlist",
            )

        item = WishlistItem(user_id=user_id, product_id=product_id)
        db.add(item)
        try:
            await db.commit()
        except IntegrityError as exc:
            # a concurrent add won the unique (user_id, product_id) slot
            await db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Product already in wishlist",
            ) from exc

        query = (
            select(WishlistItem)
            .where(WishlistItem.id == item.id)
            .options(
                selectinload(WishlistItem.product).options(*product_card_options())
            )
        )
        item = (await db.execute(query)).scalar_one()

    logger.info("User %s wishlisted product %s", user_id, product_id)
    return item


async def remove_from_wishlist(
    db: AsyncSession, user_id: str, product_id: uuid.UUID
) -> None:
    """Idempotent: removing an absent product is not an error."""
    with backend_errors("Failed to remove from wishlist"):
        await db.execute(
            delete(WishlistItem).where(
                WishlistItem.user_id == user_id,
                WishlistItem.product_id == product_id,
            )
        )
        await db.commit()
