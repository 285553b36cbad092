"""Shared helpers for the storefront data-access services."""

from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException, status
from libs.common.logging import get_logger
from services.storefront_service.models import Product
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload

logger = get_logger(__name__)

# Postgres SQLSTATE codes surfaced through the driver exception
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def _sqlstate(exc: IntegrityError) -> str | None:
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


@contextmanager
def backend_errors(message: str) -> Iterator[None]:
    """Rewrap database failures as HTTP errors with a domain message.

    HTTPExceptions raised inside the block pass through untouched. Driver
    details are logged, never returned to the client.
    """
    try:
        yield
    except HTTPException:
        raise
    except IntegrityError as exc:
        code = _sqlstate(exc)
        logger.exception("%s (integrity error %s)", message, code)
        if code == UNIQUE_VIOLATION:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="This item already exists",
            ) from exc
        if code == FOREIGN_KEY_VIOLATION:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Referenced item not found",
            ) from exc
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message
        ) from exc
    except SQLAlchemyError as exc:
        logger.exception(message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message
        ) from exc


def product_card_options():
    """Loader options for everything ProductSummary reads."""
    return (
        selectinload(Product.brand),
        selectinload(Product.images),
        selectinload(Product.dosha_links),
    )


def product_detail_options():
    """Loader options for everything ProductDetail reads."""
    return (
        *product_card_options(),
        selectinload(Product.categories),
        selectinload(Product.variants),
    )


def escape_like(text: str) -> str:
    """Make LIKE wildcards in user text match literally (escape char ``\\``)."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
