"""Catalog models: brands, categories, products and their satellites.

The catalog is maintained by the back office; the storefront only reads it,
apart from the product view log used for analytics.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.storefront_service.models.enums import Dosha, ProductStatus, enum_values
from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey, Index, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

# ============================================================================
# BRANDS & CATEGORIES
# ============================================================================


class Brand(Base):
    """Manufacturers (e.g., 'Kottakkal Arya Vaidya Sala')."""

    __tablename__ = "brands"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    slug: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    logo_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    website_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    established_year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    certifications: Mapped[list] = mapped_column(JSON, default=list)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default="true"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    products = relationship("Product", back_populates="brand")

    def __repr__(self):
        return f"<Brand {self.name}>"


class Category(Base):
    """Product categories, nested through parent_id (e.g., 'Classical > Churna')."""

    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    parent_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    )
    image_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    meta_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default="true"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    parent = relationship("Category", remote_side=[id], back_populates="children")
    children = relationship(
        "Category", back_populates="parent", order_by="Category.sort_order"
    )

    def __repr__(self):
        return f"<Category {self.name}>"


# ============================================================================
# PRODUCTS
# ============================================================================


class Product(Base):
    """Sellable products (e.g., 'Chyawanprash Premium - Immunity Booster')."""

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    sku: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    short_description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    brand_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("brands.id", ondelete="SET NULL"), nullable=True
    )

    # Classification (e.g., type='classical', form='paste')
    type: Mapped[str] = mapped_column(String(50), nullable=False, default="classical")
    form: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Pricing; selling_price is what the customer pays
    base_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    selling_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    discount_percentage: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), default=0, server_default="0"
    )
    tax_rate: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), default=0, server_default="0"
    )
    weight: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)

    # Inventory
    track_inventory: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default="true"
    )
    stock_quantity: Mapped[int] = mapped_column(
        Integer, default=0, server_default="0", nullable=False
    )
    low_stock_threshold: Mapped[int] = mapped_column(
        Integer, default=10, server_default="10"
    )

    # Formulation details
    dosage_form: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    pack_size: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    ingredients: Mapped[list] = mapped_column(JSON, default=list)
    indications: Mapped[list] = mapped_column(JSON, default=list)
    contraindications: Mapped[list] = mapped_column(JSON, default=list)
    dosage_instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # SEO / search
    meta_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    search_keywords: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[ProductStatus] = mapped_column(
        SAEnum(
            ProductStatus,
            values_callable=enum_values,
            name="product_status_enum",
        ),
        default=ProductStatus.DRAFT,
        server_default="draft",
    )
    is_featured: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false"
    )
    is_prescription_required: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false"
    )

    # Review aggregates, maintained by the backend
    average_rating: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(3, 2), nullable=True
    )
    review_count: Mapped[int] = mapped_column(Integer, default=0, server_default="0")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    __table_args__ = (
        CheckConstraint("stock_quantity >= 0", name="non_negative_stock"),
        Index("ix_products_status_featured", "status", "is_featured"),
    )

    # Relationships
    brand = relationship("Brand", back_populates="products")
    categories = relationship(
        "Category", secondary="product_categories", order_by="Category.sort_order"
    )
    images = relationship(
        "ProductImage",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductImage.sort_order",
    )
    variants = relationship(
        "ProductVariant", back_populates="product", cascade="all, delete-orphan"
    )
    dosha_links = relationship(
        "ProductDosha", back_populates="product", cascade="all, delete-orphan"
    )

    @property
    def constitution(self) -> list[Dosha]:
        """Doshas this product suits; requires dosha_links to be loaded."""
        return [link.dosha for link in self.dosha_links]

    @property
    def in_stock(self) -> bool:
        return not self.track_inventory or self.stock_quantity > 0

    @property
    def is_low_stock(self) -> bool:
        return self.track_inventory and self.stock_quantity <= self.low_stock_threshold

    def __repr__(self):
        return f"<Product {self.sku}>"


class ProductCategory(Base):
    """Junction table for product-category membership."""

    __tablename__ = "product_categories"

    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True
    )


class ProductDosha(Base):
    """Constitution tags for a product (any of vata, pitta, kapha)."""

    __tablename__ = "product_doshas"

    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True
    )
    dosha: Mapped[Dosha] = mapped_column(
        SAEnum(Dosha, values_callable=enum_values, name="dosha_enum"),
        primary_key=True,
    )

    product = relationship("Product", back_populates="dosha_links")


class ProductImage(Base):
    """Product images."""

    __tablename__ = "product_images"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    image_url: Mapped[str] = mapped_column(String(512), nullable=False)
    alt_text: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    is_primary: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )

    product = relationship("Product", back_populates="images")

    def __repr__(self):
        return f"<ProductImage {self.id}>"


class ProductVariant(Base):
    """Purchasable forms of a product (e.g., '500g jar', '1kg jar')."""

    __tablename__ = "product_variants"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    sku: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    compare_at_price: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(12, 2), nullable=True
    )
    stock_quantity: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    # e.g., {"Size": "500g"}
    variant_options: Mapped[dict] = mapped_column(JSON, default=dict)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default="true"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    product = relationship("Product", back_populates="variants")

    def __repr__(self):
        return f"<ProductVariant {self.sku}>"


# ============================================================================
# RECOMMENDATIONS & ANALYTICS
# ============================================================================


class ProductRecommendation(Base):
    """Precomputed 'customers also bought' pairs, highest score first."""

    __tablename__ = "product_recommendations"

    source_product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True
    )
    recommended_product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True
    )
    score: Mapped[Decimal] = mapped_column(Numeric(6, 4), default=0)

    recommended_product = relationship(
        "Product", foreign_keys=[recommended_product_id]
    )


class ProductView(Base):
    """One row per product detail page view."""

    __tablename__ = "product_views"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    viewed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
