"""Category queries: navigation tree, lookup by slug, breadcrumbs."""

import uuid
from typing import Optional

from libs.common.logging import get_logger
from services.storefront_service.models import Category
from services.storefront_service.schemas import (
    CategoryDetail,
    CategoryResponse,
    CategoryWithChildren,
)
from services.storefront_service.services._helpers import backend_errors, escape_like
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

logger = get_logger(__name__)

# Guards breadcrumb walks against a parent_id cycle in bad data
MAX_CATEGORY_DEPTH = 10


def to_tree(category: Category, depth: int) -> CategoryWithChildren:
    """Convert a category and ``depth`` levels of loaded children."""
    node = CategoryWithChildren.model_validate(
        CategoryResponse.model_validate(category).model_dump()
    )
    if depth > 0:
        node.children = [
            to_tree(child, depth - 1) for child in category.children if child.is_active
        ]
    return node


async def get_categories(db: AsyncSession) -> list[CategoryWithChildren]:
    """Active top-level categories with their direct children."""
    with backend_errors("Failed to fetch categories"):
        query = (
            select(Category)
            .where(Category.parent_id.is_(None), Category.is_active.is_(True))
            .order_by(Category.sort_order, Category.name)
            .options(selectinload(Category.children))
        )
        categories = (await db.execute(query)).scalars().all()
        return [to_tree(c, depth=1) for c in categories]


async def get_category_hierarchy(db: AsyncSession) -> list[CategoryWithChildren]:
    """Active top-level categories with two levels of descendants."""
    with backend_errors("Failed to fetch category hierarchy"):
        query = (
            select(Category)
            .where(Category.parent_id.is_(None), Category.is_active.is_(True))
            .order_by(Category.sort_order, Category.name)
            .options(selectinload(Category.children).selectinload(Category.children))
        )
        categories = (await db.execute(query)).scalars().all()
        return [to_tree(c, depth=2) for c in categories]


async def get_category_by_slug(
    db: AsyncSession, slug: str
) -> Optional[CategoryDetail]:
    with backend_errors("Failed to fetch category"):
        query = (
            select(Category)
            .where(Category.slug == slug, Category.is_active.is_(True))
            .options(selectinload(Category.children), selectinload(Category.parent))
        )
        category = (await db.execute(query)).scalar_one_or_none()
        if category is None:
            return None

        breadcrumbs = await get_category_breadcrumbs(db, category.id)
        return CategoryDetail(
            category=to_tree(category, depth=1),
            parent=(
                CategoryResponse.model_validate(category.parent)
                if category.parent
                else None
            ),
            breadcrumbs=breadcrumbs,
        )


async def get_featured_categories(
    db: AsyncSession, limit: int = 8
) -> list[CategoryResponse]:
    """Active categories that have artwork to show on the home page."""
    with backend_errors("Failed to fetch featured categories"):
        query = (
            select(Category)
            .where(Category.is_active.is_(True), Category.image_url.is_not(None))
            .order_by(Category.sort_order, Category.name)
            .limit(limit)
        )
        result = await db.execute(query)
        return [CategoryResponse.model_validate(c) for c in result.scalars().all()]


async def search_categories(db: AsyncSession, query: str) -> list[CategoryResponse]:
    with backend_errors("Failed to search categories"):
        stmt = (
            select(Category)
            .where(
                Category.is_active.is_(True),
                Category.name.ilike(f"%{escape_like(query)}%", escape="\\"),
            )
            .order_by(Category.name)
        )
        result = await db.execute(stmt)
        return [CategoryResponse.model_validate(c) for c in result.scalars().all()]


async def get_category_breadcrumbs(
    db: AsyncSession, category_id: uuid.UUID
) -> list[CategoryResponse]:
    """Root-first path down to ``category_id``. Empty on backend failure."""
    breadcrumbs: list[CategoryResponse] = []
    current_id: Optional[uuid.UUID] = category_id
    try:
        while current_id and len(breadcrumbs) < MAX_CATEGORY_DEPTH:
            category = await db.get(Category, current_id)
            if category is None:
                break
            breadcrumbs.insert(0, CategoryResponse.model_validate(category))
            current_id = category.parent_id
    except SQLAlchemyError:
        logger.exception("Error fetching breadcrumbs for category %s", category_id)
        return []
    return breadcrumbs
