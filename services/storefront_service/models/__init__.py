"""Storefront models package."""

from services.storefront_service.models.catalog import (
    Brand,
    Category,
    Product,
    ProductCategory,
    ProductDosha,
    ProductImage,
    ProductRecommendation,
    ProductVariant,
    ProductView,
)
from services.storefront_service.models.commerce import (
    Order,
    OrderItem,
    UserProfile,
    WishlistItem,
)
from services.storefront_service.models.enums import (
    CANCELLABLE_ORDER_STATUSES,
    Dosha,
    Gender,
    OrderStatus,
    PaymentStatus,
    ProductStatus,
)

__all__ = [
    "Brand",
    "CANCELLABLE_ORDER_STATUSES",
    "Category",
    "Dosha",
    "Gender",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PaymentStatus",
    "Product",
    "ProductCategory",
    "ProductDosha",
    "ProductImage",
    "ProductRecommendation",
    "ProductStatus",
    "ProductVariant",
    "ProductView",
    "UserProfile",
    "WishlistItem",
]
