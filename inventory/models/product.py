from dataclasses import dataclass
from datetime import datetime
import enum


class ProductStatus(str, enum.Enum):
    """Enum for product status."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    DISCONTINUED = "discontinued"


# Categories offered by the dashboard, in display order
CATEGORIES = [
    "Electronics",
    "Clothing",
    "Home & Garden",
    "Sports",
    "Books",
    "Automotive",
    "Health & Beauty",
    "Toys",
]

STATUS_COLORS = {
    ProductStatus.ACTIVE: "green",
    ProductStatus.INACTIVE: "yellow",
    ProductStatus.DISCONTINUED: "red",
}

PLACEHOLDER_IMAGE_URL = "https://picsum.photos/400/400?random={n}"


def category_image_url(category: str) -> str:
    """
    Deterministic placeholder image for a category.

    Known categories map to a fixed image each; anything else shares
    a single fallback image.
    """
    try:
        n = CATEGORIES.index(category) + 1
    except ValueError:
        n = len(CATEGORIES) + 1
    return PLACEHOLDER_IMAGE_URL.format(n=n)


@dataclass
class Product:
    """
    Product record held by the in-memory store.

    Attributes:
        id: Unique identifier, assigned by the store
        name: Product name
        price: Unit price (non-negative)
        stock_quantity: Units on hand (non-negative)
        category: Product category
        status: Catalog status
        vendor: Supplying vendor
        description: Free-form description
        image_url: Image URL or data URI
        created_at: Timestamp when the product was created
        updated_at: Timestamp when the product was last updated
    """
    id: str
    name: str
    price: float
    stock_quantity: int
    category: str
    status: ProductStatus
    vendor: str
    description: str
    image_url: str
    created_at: datetime
    updated_at: datetime

    def __repr__(self):
        return f"<Product(id='{self.id}', name='{self.name}', stock={self.stock_quantity})>"
