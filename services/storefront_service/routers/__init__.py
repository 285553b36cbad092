"""Storefront service routers package."""

from services.storefront_service.routers.categories import router as categories_router
from services.storefront_service.routers.orders import router as orders_router
from services.storefront_service.routers.products import router as products_router
from services.storefront_service.routers.profile import router as profile_router
from services.storefront_service.routers.search import router as search_router
from services.storefront_service.routers.wishlist import router as wishlist_router

__all__ = [
    "categories_router",
    "orders_router",
    "products_router",
    "profile_router",
    "search_router",
    "wishlist_router",
]
