"""
Model factories for creating valid test data.

Every factory produces a valid, insertable SQLAlchemy model instance.
Override any field via kwargs.

Usage:
    product = ProductFactory.create(selling_price=Decimal("19.99"))
    db_session.add(product)
    await db_session.commit()
"""

import uuid
from decimal import Decimal

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _uuid() -> uuid.UUID:
    return uuid.uuid4()


def _suffix() -> str:
    return uuid.uuid4().hex[:8]


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class BrandFactory:
    @staticmethod
    def create(**overrides):
        from services.storefront_service.models import Brand

        suffix = _suffix()
        defaults = {
            "id": _uuid(),
            "name": f"Test Brand {suffix}",
            "slug": f"brand-{suffix}",
            "country": "India",
            "certifications": ["GMP Certified"],
            "is_active": True,
        }
        defaults.update(overrides)
        return Brand(**defaults)


class CategoryFactory:
    @staticmethod
    def create(**overrides):
        from services.storefront_service.models import Category

        suffix = _suffix()
        defaults = {
            "id": _uuid(),
            "name": f"Category {suffix}",
            "slug": f"category-{suffix}",
            "sort_order": 0,
            "is_active": True,
        }
        defaults.update(overrides)
        return Category(**defaults)


class ProductFactory:
    @staticmethod
    def create(doshas=(), **overrides):
        from services.storefront_service.models import (
            Product,
            ProductDosha,
            ProductImage,
            ProductStatus,
        )

        suffix = _suffix()
        defaults = {
            "id": _uuid(),
            "sku": f"AYU-TST-{suffix}",
            "name": f"Triphala Churna {suffix}",
            "slug": f"triphala-churna-{suffix}",
            "short_description": "Gentle digestive support",
            "type": "classical",
            "form": "powder",
            "base_price": Decimal("24.99"),
            "selling_price": Decimal("19.99"),
            "discount_percentage": Decimal("20"),
            "stock_quantity": 50,
            "status": ProductStatus.ACTIVE,
            "is_featured": False,
            "is_prescription_required": False,
            "review_count": 0,
            "images": [
                ProductImage(image_url=f"/images/{suffix}.jpg", is_primary=True)
            ],
            "dosha_links": [ProductDosha(dosha=d) for d in doshas],
            "categories": [],
            "variants": [],
        }
        defaults.update(overrides)
        return Product(**defaults)


class ProductVariantFactory:
    @staticmethod
    def create(product_id=None, **overrides):
        from services.storefront_service.models import ProductVariant

        defaults = {
            "id": _uuid(),
            "product_id": product_id or _uuid(),
            "sku": f"AYU-VAR-{_suffix()}",
            "name": "500g jar",
            "price": Decimal("19.99"),
            "stock_quantity": 20,
            "variant_options": {"Size": "500g"},
        }
        defaults.update(overrides)
        return ProductVariant(**defaults)


# ---------------------------------------------------------------------------
# Commerce
# ---------------------------------------------------------------------------


class OrderFactory:
    @staticmethod
    def create(**overrides):
        from services.storefront_service.models import Order, OrderStatus

        defaults = {
            "id": _uuid(),
            "order_number": f"AYU-1700000000000-{_suffix().upper()[:6]}",
            "user_id": "user-123",
            "status": OrderStatus.PENDING,
            "subtotal": Decimal("40.00"),
            "tax_amount": Decimal("7.20"),
            "shipping_amount": Decimal("5.00"),
            "discount_amount": Decimal("0"),
            "total_amount": Decimal("52.20"),
            "currency": "USD",
            "shipping_address": address_payload(),
            "payment_method": "cod",
            "items": [],
        }
        defaults.update(overrides)
        return Order(**defaults)


class UserProfileFactory:
    @staticmethod
    def create(**overrides):
        from services.storefront_service.models import UserProfile

        defaults = {
            "id": f"user-{_suffix()}",
            "email": f"test-{_suffix()}@example.com",
            "first_name": "Asha",
            "last_name": "Nair",
            "email_verified": True,
            "is_active": True,
        }
        defaults.update(overrides)
        return UserProfile(**defaults)


# ---------------------------------------------------------------------------
# Payloads & snapshots
# ---------------------------------------------------------------------------


def address_payload(**overrides) -> dict:
    defaults = {
        "first_name": "Asha",
        "last_name": "Nair",
        "email": "asha@example.com",
        "phone": "+91 98470 00000",
        "address_line_1": "12 Temple Road",
        "city": "Kochi",
        "state": "Kerala",
        "postal_code": "682001",
        "country": "India",
    }
    defaults.update(overrides)
    return defaults


def product_summary(**overrides):
    """A client-side product snapshot, no database involved."""
    from services.storefront_service.schemas import ProductSummary

    suffix = _suffix()
    defaults = {
        "id": _uuid(),
        "sku": f"AYU-SNP-{suffix}",
        "name": f"Ashwagandha Tablets {suffix}",
        "slug": f"ashwagandha-tablets-{suffix}",
        "base_price": Decimal("2499"),
        "selling_price": Decimal("1999"),
        "stock_quantity": 10,
    }
    defaults.update(overrides)
    return ProductSummary(**defaults)
