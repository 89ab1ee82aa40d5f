from datetime import datetime, timedelta, timezone
from typing import List, Optional
import random

from inventory.models.product import CATEGORIES, Product, ProductStatus

VENDORS = [
    "TechCorp",
    "FashionHub",
    "HomeStyle",
    "SportZone",
    "BookWorld",
    "AutoParts",
    "BeautyCare",
    "ToyLand",
]

DEMO_IMAGE_URL = "https://picsum.photos/400/400?random={i}"


def generate_products(
    count: int,
    seed: Optional[int] = None,
    now: Optional[datetime] = None
) -> List[Product]:
    """
    Generate demo products for an empty dashboard.

    Args:
        count: Number of products to build
        seed: Random seed; the same seed always yields the same products
        now: Reference time (defaults to the current UTC time)

    Returns:
        Products prod-001 .. prod-NNN in that order
    """
    rng = random.Random(seed)
    now = now or datetime.now(timezone.utc)
    statuses = list(ProductStatus)
    products = []

    for i in range(1, count + 1):
        category = rng.choice(CATEGORIES)
        status = rng.choice(statuses)
        vendor = rng.choice(VENDORS)

        created_at = now - timedelta(days=rng.random() * 365)
        updated_at = created_at + timedelta(days=rng.random() * 30)

        products.append(Product(
            id=f"prod-{i:03d}",
            name=f"{category} Product {i}",
            price=round(rng.random() * 1000 + 10, 2),
            stock_quantity=rng.randint(1, 1000),
            category=category,
            status=status,
            vendor=vendor,
            description=f"This is a {category.lower()} product with high quality and great features.",
            image_url=DEMO_IMAGE_URL.format(i=i),
            created_at=created_at,
            updated_at=updated_at,
        ))

    return products
