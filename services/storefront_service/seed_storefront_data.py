"""Seed script for storefront sample data.

Creates brands, a two-level category tree, and a set of classical Ayurvedic
products with images, variants and dosha tags so the catalog, search and
checkout flows can be exercised end-to-end.

Usage:
    python -m services.storefront_service.seed_storefront_data
"""

import asyncio
from decimal import Decimal

from libs.db.base import Base
from libs.db.config import AsyncSessionLocal, engine
from services.storefront_service.models import (
    Brand,
    Category,
    Dosha,
    Product,
    ProductDosha,
    ProductImage,
    ProductRecommendation,
    ProductStatus,
    ProductVariant,
)
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

BRANDS = [
    {
        "name": "Kottakkal Arya Vaidya Sala",
        "slug": "kottakkal",
        "description": "Authentic Ayurvedic medicines since 1902",
        "established_year": 1902,
        "country": "India",
        "certifications": ["ISO 9001:2015", "GMP Certified", "AYUSH Approved"],
    },
    {
        "name": "Kerala Ayurveda",
        "slug": "kerala-ayurveda",
        "description": "Classical formulations from Kerala",
        "established_year": 1945,
        "country": "India",
        "certifications": ["GMP Certified", "AYUSH Approved"],
    },
]

# parent slug -> (name, description, [(child slug, child name)])
CATEGORY_TREE = {
    "classical": (
        "Classical Ayurveda",
        "Time-tested formulations from the classical texts",
        [("rasayana", "Rasayana"), ("churna", "Churna"), ("arishta", "Arishta")],
    ),
    "wellness": (
        "Wellness",
        "Everyday care for body and mind",
        [("skin-hair", "Skin & Hair"), ("digestive-care", "Digestive Care")],
    ),
}

PRODUCTS = [
    {
        "sku": "AYU-CLA-001",
        "name": "Chyawanprash Premium - Immunity Booster",
        "slug": "chyawanprash-premium-immunity-booster",
        "short_description": "Traditional Ayurvedic immunity booster with 40+ herbs",
        "brand": "kottakkal",
        "categories": ["classical", "rasayana"],
        "type": "classical",
        "form": "paste",
        "base_price": "899",
        "selling_price": "749",
        "discount_percentage": "17",
        "stock_quantity": 150,
        "pack_size": "500g (50 servings)",
        "ingredients": ["Amla", "Ashwagandha", "Giloy", "Brahmi", "Honey", "Ghee"],
        "indications": ["Low immunity", "Frequent infections", "Low energy"],
        "contraindications": ["Diabetes (consult doctor)", "Acute fever"],
        "is_featured": True,
        "average_rating": "4.8",
        "review_count": 1247,
        "doshas": [Dosha.VATA, Dosha.PITTA, Dosha.KAPHA],
        "variants": [("500g jar", "749"), ("1kg jar", "1399")],
    },
    {
        "sku": "AYU-CAR-002",
        "name": "Arjunarishta - Heart Health Tonic",
        "slug": "arjunarishta-heart-health-tonic",
        "short_description": "Natural heart tonic for cardiovascular wellness",
        "brand": "kottakkal",
        "categories": ["classical", "arishta"],
        "type": "cardiology",
        "form": "liquid",
        "base_price": "650",
        "selling_price": "650",
        "stock_quantity": 89,
        "pack_size": "450ml (30 servings)",
        "is_featured": True,
        "average_rating": "4.6",
        "review_count": 892,
        "doshas": [Dosha.PITTA, Dosha.VATA],
    },
    {
        "sku": "AYU-DER-003",
        "name": "Kumkumadi Tailam - Radiant Skin Oil",
        "slug": "kumkumadi-tailam-radiant-skin-oil",
        "short_description": "Saffron facial oil for an even, glowing complexion",
        "brand": "kerala-ayurveda",
        "categories": ["wellness", "skin-hair"],
        "type": "dermatology",
        "form": "oil",
        "base_price": "1299",
        "selling_price": "1099",
        "discount_percentage": "15",
        "stock_quantity": 67,
        "pack_size": "12ml (3 months supply)",
        "is_featured": True,
        "average_rating": "4.9",
        "review_count": 2156,
        "doshas": [Dosha.VATA, Dosha.PITTA],
    },
    {
        "sku": "AYU-GAS-005",
        "name": "Hingwashtak Churna - Digestive Powder",
        "slug": "hingwashtak-churna-digestive-powder",
        "short_description": "Asafoetida blend that eases bloating and gas",
        "brand": "kerala-ayurveda",
        "categories": ["classical", "churna", "digestive-care"],
        "type": "gastroenterology",
        "form": "powder",
        "base_price": "320",
        "selling_price": "275",
        "discount_percentage": "14",
        "stock_quantity": 198,
        "pack_size": "100g (100 servings)",
        "average_rating": "4.5",
        "review_count": 756,
        "doshas": [Dosha.VATA, Dosha.KAPHA],
    },
    {
        "sku": "AYU-NEU-006",
        "name": "Brahmi Ghrita - Memory Enhancer",
        "slug": "brahmi-ghrita-memory-enhancer",
        "short_description": "Medicated ghee for memory and concentration",
        "brand": "kottakkal",
        "categories": ["classical", "rasayana"],
        "type": "neurology",
        "form": "ghee",
        "base_price": "850",
        "selling_price": "765",
        "discount_percentage": "10",
        "stock_quantity": 45,
        "pack_size": "200g (40 servings)",
        "is_prescription_required": True,
        "average_rating": "4.4",
        "review_count": 423,
        "doshas": [Dosha.VATA, Dosha.PITTA],
    },
    {
        "sku": "AYU-TRI-010",
        "name": "Bhringraj Oil - Hair Growth Elixir",
        "slug": "bhringraj-oil-hair-growth-elixir",
        "short_description": "Herbal oil that nourishes roots and reduces hair fall",
        "brand": "kerala-ayurveda",
        "categories": ["wellness", "skin-hair"],
        "type": "trichology",
        "form": "oil",
        "base_price": "390",
        "selling_price": "350",
        "discount_percentage": "10",
        "stock_quantity": 92,
        "pack_size": "200ml (2 months supply)",
        "is_featured": True,
        "average_rating": "4.7",
        "review_count": 1456,
        "doshas": [Dosha.VATA, Dosha.PITTA],
    },
]

# (source sku, recommended sku, score)
RECOMMENDATIONS = [
    ("AYU-CLA-001", "AYU-NEU-006", "0.92"),
    ("AYU-CLA-001", "AYU-CAR-002", "0.81"),
    ("AYU-DER-003", "AYU-TRI-010", "0.88"),
]


def build_product(data: dict, brands: dict, categories: dict) -> Product:
    product = Product(
        sku=data["sku"],
        name=data["name"],
        slug=data["slug"],
        short_description=data["short_description"],
        brand=brands[data["brand"]],
        type=data["type"],
        form=data["form"],
        base_price=Decimal(data["base_price"]),
        selling_price=Decimal(data["selling_price"]),
        discount_percentage=Decimal(data.get("discount_percentage", "0")),
        stock_quantity=data["stock_quantity"],
        pack_size=data["pack_size"],
        ingredients=data.get("ingredients", []),
        indications=data.get("indications", []),
        contraindications=data.get("contraindications", []),
        status=ProductStatus.ACTIVE,
        is_featured=data.get("is_featured", False),
        is_prescription_required=data.get("is_prescription_required", False),
        average_rating=Decimal(data["average_rating"]),
        review_count=data["review_count"],
    )
    product.categories = [categories[slug] for slug in data["categories"]]
    product.images = [
        ProductImage(
            image_url=f"/images/products/{data['slug']}.jpg",
            alt_text=f"{data['name']} front view",
            is_primary=True,
        )
    ]
    product.dosha_links = [ProductDosha(dosha=d) for d in data["doshas"]]
    product.variants = [
        ProductVariant(
            sku=f"{data['sku']}-{i + 1}",
            name=name,
            price=Decimal(price),
            stock_quantity=data["stock_quantity"],
            variant_options={"Size": name.split()[0]},
        )
        for i, (name, price) in enumerate(data.get("variants", []))
    ]
    return product


async def seed_storefront_data(db: AsyncSession) -> None:
    count = (await db.execute(select(func.count(Product.id)))).scalar()
    if count:
        print(f"Storefront data already exists ({count} products). Skipping seed.")
        return

    # =========================================================================
    # 1. BRANDS
    # =========================================================================
    brands = {data["slug"]: Brand(**data) for data in BRANDS}
    db.add_all(brands.values())

    # =========================================================================
    # 2. CATEGORIES
    # =========================================================================
    categories: dict[str, Category] = {}
    for sort_order, (slug, (name, description, children)) in enumerate(
        CATEGORY_TREE.items(), start=1
    ):
        parent = Category(
            name=name,
            slug=slug,
            description=description,
            sort_order=sort_order,
            image_url=f"/images/categories/{slug}.jpg",
        )
        categories[slug] = parent
        for child_order, (child_slug, child_name) in enumerate(children, start=1):
            categories[child_slug] = Category(
                name=child_name, slug=child_slug, parent=parent, sort_order=child_order
            )
    db.add_all(categories.values())

    # =========================================================================
    # 3. PRODUCTS
    # =========================================================================
    products = {
        data["sku"]: build_product(data, brands, categories) for data in PRODUCTS
    }
    db.add_all(products.values())
    await db.flush()

    # =========================================================================
    # 4. RECOMMENDATIONS
    # =========================================================================
    db.add_all(
        ProductRecommendation(
            source_product_id=products[source].id,
            recommended_product_id=products[target].id,
            score=Decimal(score),
        )
        for source, target, score in RECOMMENDATIONS
    )

    await db.commit()
    print(
        f"Seeded {len(brands)} brands, {len(categories)} categories "
        f"and {len(products)} products."
    )


async def main() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncSessionLocal() as db:
        await seed_storefront_data(db)
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
