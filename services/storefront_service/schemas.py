"""Pydantic schemas for the storefront service."""

import uuid
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from services.storefront_service.models import (
    Dosha,
    Gender,
    OrderStatus,
    PaymentStatus,
    ProductStatus,
)

T = TypeVar("T")

# ============================================================================
# ENVELOPE
# ============================================================================


class ApiResponse(BaseModel, Generic[T]):
    """Uniform response wrapper returned by every API route."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    message: Optional[str] = None


# ============================================================================
# BRAND & CATEGORY SCHEMAS
# ============================================================================


class BrandResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    slug: str
    description: Optional[str] = None
    logo_url: Optional[str] = None
    website_url: Optional[str] = None
    established_year: Optional[int] = None
    country: Optional[str] = None
    certifications: list[str] = []
    is_active: bool = True


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    slug: str
    description: Optional[str] = None
    parent_id: Optional[uuid.UUID] = None
    image_url: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    sort_order: int = 0
    is_active: bool = True


class CategoryWithChildren(CategoryResponse):
    children: list["CategoryWithChildren"] = []


class CategoryDetail(BaseModel):
    category: CategoryWithChildren
    parent: Optional[CategoryResponse] = None
    breadcrumbs: list[CategoryResponse] = []


# ============================================================================
# PRODUCT SCHEMAS
# ============================================================================


class ProductImageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    image_url: str
    alt_text: Optional[str] = None
    sort_order: int = 0
    is_primary: bool = False


class ProductVariantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    product_id: uuid.UUID
    sku: str
    name: str
    price: Decimal
    compare_at_price: Optional[Decimal] = None
    stock_quantity: int = 0
    variant_options: dict = {}
    is_active: bool = True


class ProductSummary(BaseModel):
    """Product card data.

    Also the snapshot the client cart and wishlist stores hold on to, so it
    must round-trip through JSON.
    """

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    sku: str
    name: str
    slug: str
    short_description: Optional[str] = None
    type: str = "classical"
    form: Optional[str] = None
    base_price: Decimal
    selling_price: Decimal
    discount_percentage: Decimal = Decimal("0")
    stock_quantity: int = 0
    low_stock_threshold: int = 10
    pack_size: Optional[str] = None
    status: ProductStatus = ProductStatus.ACTIVE
    is_featured: bool = False
    is_prescription_required: bool = False
    average_rating: Optional[Decimal] = None
    review_count: int = 0
    constitution: list[Dosha] = []
    brand: Optional[BrandResponse] = None
    images: list[ProductImageResponse] = []

    @property
    def primary_image(self) -> Optional[ProductImageResponse]:
        return next((img for img in self.images if img.is_primary), None) or (
            self.images[0] if self.images else None
        )


class ProductDetail(ProductSummary):
    """Full product page data."""

    description: Optional[str] = None
    tax_rate: Decimal = Decimal("0")
    weight: Optional[Decimal] = None
    track_inventory: bool = True
    dosage_form: Optional[str] = None
    ingredients: list[str] = []
    indications: list[str] = []
    contraindications: list[str] = []
    dosage_instructions: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    categories: list[CategoryResponse] = []
    variants: list[ProductVariantResponse] = []


class ProductWithRecommendations(BaseModel):
    product: ProductDetail
    recommendations: list[ProductSummary] = []


# ============================================================================
# FILTERS & SEARCH RESULTS
# ============================================================================


class ProductSort(str, Enum):
    NAME = "name"
    PRICE_LOW = "price_low"
    PRICE_HIGH = "price_high"
    RATING = "rating"
    NEWEST = "newest"
    FEATURED = "featured"


class PriceRange(BaseModel):
    min: Optional[Decimal] = Field(None, ge=0)
    max: Optional[Decimal] = Field(None, ge=0)


class ProductFilters(BaseModel):
    """Every filter the catalog query understands.

    Unset fields do not constrain the query. ``category`` is a slug and
    ``category_id`` an id; when both are given both must match.
    """

    model_config = ConfigDict(populate_by_name=True)

    category_id: Optional[uuid.UUID] = Field(None, alias="categoryId")
    category: Optional[str] = None
    brand_ids: list[uuid.UUID] = Field(default_factory=list, alias="brandIds")
    price_range: Optional[PriceRange] = Field(None, alias="priceRange")
    sort_by: ProductSort = Field(ProductSort.NAME, alias="sortBy")
    search: Optional[str] = None
    limit: int = Field(20, ge=1, le=100)
    offset: int = Field(0, ge=0)
    in_stock: bool = Field(False, alias="inStock")
    featured: bool = False
    constitution: list[Dosha] = Field(default_factory=list)
    min_rating: Optional[Decimal] = Field(None, ge=0, le=5, alias="rating")
    prescription_required: Optional[bool] = Field(None, alias="prescriptionRequired")
    type: Optional[str] = None


class FacetCount(BaseModel):
    id: uuid.UUID
    name: str
    count: int


class PriceBounds(BaseModel):
    min: Decimal = Decimal("0")
    max: Decimal = Decimal("10000")


class FilterFacets(BaseModel):
    brands: list[FacetCount] = []
    categories: list[FacetCount] = []
    price_range: PriceBounds = Field(default_factory=PriceBounds)


class ProductSearchResult(BaseModel):
    products: list[ProductSummary]
    total: int
    filters: FilterFacets = Field(default_factory=FilterFacets)


class QuickSearchResult(BaseModel):
    query: str
    products: list[ProductSummary]
    total: int


class AdvancedSearchRequest(BaseModel):
    query: Optional[str] = None
    filters: dict[str, Any] = Field(default_factory=dict)


class AdvancedSearchResult(ProductSearchResult):
    query: str


# ============================================================================
# ORDER SCHEMAS
# ============================================================================


class Address(BaseModel):
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    email: EmailStr
    phone: str = Field(..., max_length=50)
    address_line_1: str = Field(..., max_length=255)
    address_line_2: Optional[str] = Field(None, max_length=255)
    city: str = Field(..., max_length=100)
    state: str = Field(..., max_length=100)
    postal_code: str = Field(..., max_length=20)
    country: str = Field(..., max_length=100)
    landmark: Optional[str] = Field(None, max_length=255)


class OrderItemCreate(BaseModel):
    product_id: uuid.UUID
    variant_id: Optional[uuid.UUID] = None
    quantity: int = Field(..., ge=1)
    # Informational only; lines are always priced from the catalog
    product_name: Optional[str] = None
    product_sku: Optional[str] = None
    unit_price: Optional[Decimal] = Field(None, ge=0)


class OrderCreate(BaseModel):
    items: list[OrderItemCreate] = []
    shipping_address: Address
    billing_address: Optional[Address] = None
    coupon_code: Optional[str] = Field(None, max_length=50)
    payment_method: str = Field(..., min_length=1, max_length=50)
    notes: Optional[str] = None
    customer_notes: Optional[str] = None


class PricedOrderItem(BaseModel):
    product_id: uuid.UUID
    variant_id: Optional[uuid.UUID] = None
    product_name: str
    product_sku: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class OrderPricing(BaseModel):
    subtotal: Decimal
    tax_amount: Decimal
    shipping_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    order_items: list[PricedOrderItem]


class OrderItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    product_id: Optional[uuid.UUID]
    variant_id: Optional[uuid.UUID]
    product_name: str
    product_sku: str
    unit_price: Decimal
    quantity: int
    total_price: Decimal


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    order_number: str
    user_id: Optional[str]
    status: OrderStatus
    payment_status: PaymentStatus
    subtotal: Decimal
    tax_amount: Decimal
    shipping_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    currency: str
    coupon_code: Optional[str] = None
    shipping_address: dict
    billing_address: Optional[dict] = None
    payment_method: str
    tracking_number: Optional[str] = None
    notes: Optional[str] = None
    customer_notes: Optional[str] = None
    ordered_at: datetime
    confirmed_at: Optional[datetime] = None
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    items: list[OrderItemResponse] = []


class OrderCreated(BaseModel):
    order: OrderResponse
    pricing: OrderPricing


class OrderCancelRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=500)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
    tracking_number: Optional[str] = Field(None, max_length=100)


# ============================================================================
# WISHLIST SCHEMAS
# ============================================================================


class WishlistAddRequest(BaseModel):
    # Optional so a missing id is reported as a 400 with a readable message
    product_id: Optional[uuid.UUID] = None


class WishlistItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: str
    product_id: uuid.UUID
    created_at: datetime
    product: Optional[ProductSummary] = None


# ============================================================================
# PROFILE SCHEMAS
# ============================================================================


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    phone: Optional[str] = None
    first_name: str
    last_name: str
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    profile_picture_url: Optional[str] = None
    email_verified: bool
    phone_verified: bool
    is_active: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class ProfileUpdate(BaseModel):
    """Fields a customer may edit on their own profile."""

    model_config = ConfigDict(extra="forbid")

    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    profile_picture_url: Optional[str] = Field(None, max_length=512)

    @model_validator(mode="after")
    def reject_empty_update(self):
        if not self.model_fields_set:
            raise ValueError("No profile fields provided")
        return self
