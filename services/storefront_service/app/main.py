"""FastAPI application for the Storefront Service."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from libs.common.config import get_settings
from libs.common.error_handler import add_exception_handlers
from libs.common.middleware import add_observability_middleware
from services.storefront_service.routers import (
    categories_router,
    orders_router,
    products_router,
    profile_router,
    search_router,
    wishlist_router,
)


def create_app() -> FastAPI:
    """Create and configure the Storefront Service FastAPI app."""
    settings = get_settings()
    app = FastAPI(
        title="Ayurveda Storefront Service",
        version="0.1.0",
        description="Ayurvedic products storefront - catalog, search, wishlist, orders.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Structured logging + request tracing
    add_observability_middleware(app)

    # Every error goes out in the {success, error} envelope
    add_exception_handlers(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "storefront"}

    # Public catalog
    app.include_router(products_router, prefix="/api")
    app.include_router(search_router, prefix="/api")
    app.include_router(categories_router, prefix="/api")

    # Checkout and account
    app.include_router(orders_router, prefix="/api")
    app.include_router(wishlist_router, prefix="/api")
    app.include_router(profile_router, prefix="/api")

    return app


app = create_app()
