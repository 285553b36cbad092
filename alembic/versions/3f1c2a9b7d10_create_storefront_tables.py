"""create_storefront_tables

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

product_status_enum = sa.Enum(
    'draft', 'active', 'inactive', 'discontinued', name='product_status_enum'
)
dosha_enum = sa.Enum('vata', 'pitta', 'kapha', name='dosha_enum')
order_status_enum = sa.Enum(
    'pending', 'confirmed', 'processing', 'shipped', 'delivered', 'cancelled',
    'refunded', name='order_status_enum'
)
payment_status_enum = sa.Enum(
    'pending', 'paid', 'failed', 'refunded', 'partially_refunded',
    name='payment_status_enum'
)
gender_enum = sa.Enum('male', 'female', 'other', name='gender_enum')


def _timestamps(updated: bool = True) -> list:
    columns = [sa.Column('created_at', sa.DateTime(timezone=True), nullable=True)]
    if updated:
        columns.append(sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True))
    return columns


def upgrade() -> None:
    """Upgrade schema - Create catalog, order, wishlist and profile tables."""

    # Catalog
    op.create_table(
        'brands',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('slug', sa.String(length=150), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('logo_url', sa.String(length=512), nullable=True),
        sa.Column('website_url', sa.String(length=512), nullable=True),
        sa.Column('established_year', sa.Integer(), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=True),
        sa.Column('certifications', sa.JSON(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default='true', nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_brands'),
        sa.UniqueConstraint('slug', name='uq_brands_slug'),
    )

    op.create_table(
        'categories',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('slug', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('parent_id', sa.Uuid(), nullable=True),
        sa.Column('image_url', sa.String(length=512), nullable=True),
        sa.Column('meta_title', sa.String(length=255), nullable=True),
        sa.Column('meta_description', sa.String(length=500), nullable=True),
        sa.Column('sort_order', sa.Integer(), server_default='0', nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default='true', nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['parent_id'], ['categories.id'],
            name='fk_categories_parent_id_categories', ondelete='SET NULL'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_categories'),
        sa.UniqueConstraint('slug', name='uq_categories_slug'),
    )

    op.create_table(
        'products',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('sku', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('short_description', sa.String(length=500), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('brand_id', sa.Uuid(), nullable=True),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('form', sa.String(length=50), nullable=True),
        sa.Column('base_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('selling_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('discount_percentage', sa.Numeric(5, 2), server_default='0', nullable=True),
        sa.Column('tax_rate', sa.Numeric(5, 2), server_default='0', nullable=True),
        sa.Column('weight', sa.Numeric(10, 2), nullable=True),
        sa.Column('track_inventory', sa.Boolean(), server_default='true', nullable=True),
        sa.Column('stock_quantity', sa.Integer(), server_default='0', nullable=False),
        sa.Column('low_stock_threshold', sa.Integer(), server_default='10', nullable=True),
        sa.Column('dosage_form', sa.String(length=100), nullable=True),
        sa.Column('pack_size', sa.String(length=100), nullable=True),
        sa.Column('ingredients', sa.JSON(), nullable=True),
        sa.Column('indications', sa.JSON(), nullable=True),
        sa.Column('contraindications', sa.JSON(), nullable=True),
        sa.Column('dosage_instructions', sa.Text(), nullable=True),
        sa.Column('meta_title', sa.String(length=255), nullable=True),
        sa.Column('meta_description', sa.String(length=500), nullable=True),
        sa.Column('search_keywords', sa.Text(), nullable=True),
        sa.Column('status', product_status_enum, server_default='draft', nullable=True),
        sa.Column('is_featured', sa.Boolean(), server_default='false', nullable=True),
        sa.Column('is_prescription_required', sa.Boolean(), server_default='false', nullable=True),
        sa.Column('average_rating', sa.Numeric(3, 2), nullable=True),
        sa.Column('review_count', sa.Integer(), server_default='0', nullable=True),
        *_timestamps(),
        sa.CheckConstraint('stock_quantity >= 0', name='ck_products_non_negative_stock'),
        sa.ForeignKeyConstraint(
            ['brand_id'], ['brands.id'],
            name='fk_products_brand_id_brands', ondelete='SET NULL'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_products'),
        sa.UniqueConstraint('sku', name='uq_products_sku'),
        sa.UniqueConstraint('slug', name='uq_products_slug'),
    )
    op.create_index('ix_products_status_featured', 'products', ['status', 'is_featured'])

    op.create_table(
        'product_categories',
        sa.Column('product_id', sa.Uuid(), nullable=False),
        sa.Column('category_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(
            ['category_id'], ['categories.id'],
            name='fk_product_categories_category_id_categories', ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['product_id'], ['products.id'],
            name='fk_product_categories_product_id_products', ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('product_id', 'category_id', name='pk_product_categories'),
    )

    op.create_table(
        'product_doshas',
        sa.Column('product_id', sa.Uuid(), nullable=False),
        sa.Column('dosha', dosha_enum, nullable=False),
        sa.ForeignKeyConstraint(
            ['product_id'], ['products.id'],
            name='fk_product_doshas_product_id_products', ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('product_id', 'dosha', name='pk_product_doshas'),
    )

    op.create_table(
        'product_images',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('product_id', sa.Uuid(), nullable=False),
        sa.Column('image_url', sa.String(length=512), nullable=False),
        sa.Column('alt_text', sa.String(length=255), nullable=True),
        sa.Column('sort_order', sa.Integer(), server_default='0', nullable=True),
        sa.Column('is_primary', sa.Boolean(), server_default='false', nullable=True),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(
            ['product_id'], ['products.id'],
            name='fk_product_images_product_id_products', ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_product_images'),
    )

    op.create_table(
        'product_variants',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('product_id', sa.Uuid(), nullable=False),
        sa.Column('sku', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('compare_at_price', sa.Numeric(12, 2), nullable=True),
        sa.Column('stock_quantity', sa.Integer(), server_default='0', nullable=True),
        sa.Column('variant_options', sa.JSON(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default='true', nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['product_id'], ['products.id'],
            name='fk_product_variants_product_id_products', ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_product_variants'),
        sa.UniqueConstraint('sku', name='uq_product_variants_sku'),
    )

    op.create_table(
        'product_recommendations',
        sa.Column('source_product_id', sa.Uuid(), nullable=False),
        sa.Column('recommended_product_id', sa.Uuid(), nullable=False),
        sa.Column('score', sa.Numeric(6, 4), nullable=True),
        sa.ForeignKeyConstraint(
            ['recommended_product_id'], ['products.id'],
            name='fk_product_recommendations_recommended_product_id_products',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['source_product_id'], ['products.id'],
            name='fk_product_recommendations_source_product_id_products',
            ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint(
            'source_product_id', 'recommended_product_id',
            name='pk_product_recommendations'
        ),
    )

    op.create_table(
        'product_views',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('product_id', sa.Uuid(), nullable=False),
        sa.Column('viewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ['product_id'], ['products.id'],
            name='fk_product_views_product_id_products', ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_product_views'),
    )
    op.create_index('ix_product_views_product_id', 'product_views', ['product_id'])

    # Orders
    op.create_table(
        'orders',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('order_number', sa.String(length=40), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=True),
        sa.Column('status', order_status_enum, server_default='pending', nullable=True),
        sa.Column('payment_status', payment_status_enum, server_default='pending', nullable=True),
        sa.Column('subtotal', sa.Numeric(12, 2), nullable=False),
        sa.Column('tax_amount', sa.Numeric(12, 2), server_default='0', nullable=True),
        sa.Column('shipping_amount', sa.Numeric(12, 2), server_default='0', nullable=True),
        sa.Column('discount_amount', sa.Numeric(12, 2), server_default='0', nullable=True),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=True),
        sa.Column('exchange_rate', sa.Numeric(10, 4), nullable=True),
        sa.Column('coupon_code', sa.String(length=50), nullable=True),
        sa.Column('shipping_address', sa.JSON(), nullable=False),
        sa.Column('billing_address', sa.JSON(), nullable=True),
        sa.Column('payment_method', sa.String(length=50), nullable=False),
        sa.Column('shipping_method', sa.String(length=50), nullable=True),
        sa.Column('tracking_number', sa.String(length=100), nullable=True),
        sa.Column('estimated_delivery', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('customer_notes', sa.Text(), nullable=True),
        sa.Column('ordered_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('confirmed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('shipped_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('delivered_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('total_amount >= 0', name='ck_orders_non_negative_total'),
        sa.PrimaryKeyConstraint('id', name='pk_orders'),
    )
    op.create_index('ix_orders_order_number', 'orders', ['order_number'], unique=True)
    op.create_index('ix_orders_user_id', 'orders', ['user_id'])

    op.create_table(
        'order_items',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('order_id', sa.Uuid(), nullable=False),
        sa.Column('product_id', sa.Uuid(), nullable=True),
        sa.Column('variant_id', sa.Uuid(), nullable=True),
        sa.Column('product_name', sa.String(length=255), nullable=False),
        sa.Column('product_sku', sa.String(length=100), nullable=False),
        sa.Column('unit_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('total_price', sa.Numeric(12, 2), nullable=False),
        *_timestamps(updated=False),
        sa.CheckConstraint('quantity > 0', name='ck_order_items_positive_quantity'),
        sa.ForeignKeyConstraint(
            ['order_id'], ['orders.id'],
            name='fk_order_items_order_id_orders', ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['product_id'], ['products.id'],
            name='fk_order_items_product_id_products', ondelete='SET NULL'
        ),
        sa.ForeignKeyConstraint(
            ['variant_id'], ['product_variants.id'],
            name='fk_order_items_variant_id_product_variants', ondelete='SET NULL'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_order_items'),
    )

    # Wishlists & profiles
    op.create_table(
        'wishlist_items',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('product_id', sa.Uuid(), nullable=False),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(
            ['product_id'], ['products.id'],
            name='fk_wishlist_items_product_id_products', ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_wishlist_items'),
        sa.UniqueConstraint('user_id', 'product_id', name='uq_wishlist_user_product'),
    )
    op.create_index('ix_wishlist_items_user_id', 'wishlist_items', ['user_id'])

    op.create_table(
        'users',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('gender', gender_enum, nullable=True),
        sa.Column('profile_picture_url', sa.String(length=512), nullable=True),
        sa.Column('email_verified', sa.Boolean(), server_default='false', nullable=True),
        sa.Column('phone_verified', sa.Boolean(), server_default='false', nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default='true', nullable=True),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
    )


def downgrade() -> None:
    """Downgrade schema - Drop storefront tables and enum types."""
    op.drop_table('users')
    op.drop_index('ix_wishlist_items_user_id', table_name='wishlist_items')
    op.drop_table('wishlist_items')
    op.drop_table('order_items')
    op.drop_index('ix_orders_user_id', table_name='orders')
    op.drop_index('ix_orders_order_number', table_name='orders')
    op.drop_table('orders')
    op.drop_index('ix_product_views_product_id', table_name='product_views')
    op.drop_table('product_views')
    op.drop_table('product_recommendations')
    op.drop_table('product_variants')
    op.drop_table('product_images')
    op.drop_table('product_doshas')
    op.drop_table('product_categories')
    op.drop_index('ix_products_status_featured', table_name='products')
    op.drop_table('products')
    op.drop_table('categories')
    op.drop_table('brands')

    bind = op.get_bind()
    for enum in (
        gender_enum,
        payment_status_enum,
        order_status_enum,
        dosha_enum,
        product_status_enum,
    ):
        enum.drop(bind, checkfirst=True)
