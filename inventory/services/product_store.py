from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
import logging
import math
import re
import threading
import time

from inventory.models.product import (
    Product,
    ProductStatus,
    STATUS_COLORS,
    category_image_url,
)
from inventory.schemas.product import ProductCreate, ProductUpdate
from inventory.services.exceptions import ProductNotFoundError, ProductValidationError
from inventory.services.query_engine import (
    Pagination,
    ProductFilters,
    ProductPage,
    ProductSort,
    query,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "price", "category", "status", "vendor")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_product_fields(fields: Dict[str, Any]) -> None:
    """
    Check a complete set of product fields before it is written.

    Raises:
        ProductValidationError: If a required field is missing, the price
            is not a non-negative number, or a supplied stock quantity is
            not a non-negative integer
    """
    missing = [name for name in REQUIRED_FIELDS if _is_missing(fields.get(name))]
    if missing:
        raise ProductValidationError(f"Missing required fields: {', '.join(missing)}")

    price = fields["price"]
    if not _is_number(price) or not math.isfinite(price) or price < 0:
        raise ProductValidationError("Invalid price")

    stock = fields.get("stock_quantity")
    if stock is not None and (not isinstance(stock, int) or isinstance(stock, bool) or stock < 0):
        raise ProductValidationError("Invalid stock quantity")


class ProductStore:
    """
    In-memory owner of the product collection.

    This store handles:
    - Listing products (filter, sort, paginate)
    - Creating products (id and timestamp assignment, defaults)
    - Reading, updating and deleting products by id
    - Category and status summaries

    Records are kept in a dict in insertion order; the newest product
    is the last key, so listings read it in reverse. Updating an
    existing key keeps its position.

    Every operation runs under a single lock because the HTTP layer
    serves sync handlers from a thread pool. Callers only ever receive
    copies of the stored records.
    """

    ID_PREFIX = "prod-"

    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._products: Dict[str, Product] = {}
        self._lock = threading.Lock()
        self._last_id_ms = 0
        if products is not None:
            self.seed(products)

    def _next_id(self) -> str:
        """Time-based id; never repeats even within one millisecond."""
        ms = int(time.time() * 1000)
        if ms <= self._last_id_ms:
            ms = self._last_id_ms + 1
        self._last_id_ms = ms
        return f"{self.ID_PREFIX}{ms}"

    def seed(self, products: Iterable[Product]) -> int:
        """
        Bulk-load ready-made records.

        Args:
            products: Records in newest-first order

        Returns:
            Number of records loaded

        Raises:
            ProductValidationError: If an id is repeated in the batch or
                already held by the store; nothing is loaded in that case
        """
        products = list(products)
        with self._lock:
            seen = set(self._products)
            for product in products:
                if product.id in seen:
                    raise ProductValidationError(f"Duplicate product id: {product.id}")
                seen.add(product.id)
            for product in reversed(products):
                self._products[product.id] = replace(product)
        logger.info(f"Seeded {len(products)} products")
        return len(products)

    def snapshot(self) -> List[Product]:
        """Return copies of all products, newest first."""
        with self._lock:
            return [replace(p) for p in reversed(self._products.values())]

    def count(self) -> int:
        with self._lock:
            return len(self._products)

    def list(
        self,
        filters: Optional[ProductFilters] = None,
        sort: Optional[ProductSort] = None,
        pagination: Optional[Pagination] = None
    ) -> ProductPage:
        """
        Get a page of products.

        Args:
            filters: Category, status and search filters
            sort: Sort field and direction (default: newest first)
            pagination: Page number and size (default: first 10)

        Returns:
            ProductPage computed over a consistent snapshot
        """
        return query(
            self.snapshot(),
            filters or ProductFilters(),
            sort or ProductSort(),
            pagination or Pagination()
        )

    def create(self, draft: ProductCreate) -> Product:
        """
        Create a new product.

        Args:
            draft: Client-supplied product fields

        Returns:
            The created product

        Raises:
            ProductValidationError: If required fields are missing or
                numeric fields are out of range
        """
        fields = draft.model_dump()
        validate_product_fields(fields)

        with self._lock:
            now = _utcnow()
            product = Product(
                id=self._next_id(),
                name=fields["name"],
                price=float(fields["price"]),
                stock_quantity=fields["stock_quantity"] or 0,
                category=fields["category"],
                status=ProductStatus(fields["status"]),
                vendor=fields["vendor"],
                description=fields["description"] or "",
                image_url=fields["image_url"] or category_image_url(fields["category"]),
                created_at=now,
                updated_at=now,
            )
            self._products[product.id] = product

        logger.info(f"Product {product.id} created")
        return replace(product)

    def get(self, product_id: str) -> Product:
        """
        Get a product by ID.

        Raises:
            ProductNotFoundError: If no product has this ID
        """
        with self._lock:
            product = self._products.get(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            return replace(product)

    read = get

    def update(self, product_id: str, patch: ProductUpdate) -> Product:
        """
        Update an existing product.

        Fields that are unset or null in the patch keep their current
        value. The merged record is validated like a new draft; id and
        created_at never change.

        Args:
            product_id: ID of product to update
            patch: Fields to change

        Returns:
            The updated product

        Raises:
            ProductNotFoundError: If no product has this ID
            ProductValidationError: If the merged record is invalid
        """
        changes = patch.model_dump(exclude_unset=True, exclude_none=True)

        with self._lock:
            existing = self._products.get(product_id)
            if existing is None:
                raise ProductNotFoundError(product_id)

            merged = {
                "name": existing.name,
                "price": existing.price,
                "stock_quantity": existing.stock_quantity,
                "category": existing.category,
                "status": existing.status,
                "vendor": existing.vendor,
                "description": existing.description,
                "image_url": existing.image_url,
            }
            merged.update(changes)
            validate_product_fields(merged)

            updated = replace(
                existing,
                name=merged["name"],
                price=float(merged["price"]),
                stock_quantity=merged["stock_quantity"],
                category=merged["category"],
                status=ProductStatus(merged["status"]),
                vendor=merged["vendor"],
                description=merged["description"],
                image_url=merged["image_url"] or category_image_url(merged["category"]),
                updated_at=max(_utcnow(), existing.created_at),
            )
            self._products[product_id] = updated

        logger.info(f"Product {product_id} updated")
        return replace(updated)

    def delete(self, product_id: str) -> Product:
        """
        Delete a product.

        Returns:
            The removed product

        Raises:
            ProductNotFoundError: If no product has this ID
        """
        with self._lock:
            product = self._products.pop(product_id, None)
            if product is None:
                raise ProductNotFoundError(product_id)

        logger.info(f"Product {product_id} deleted")
        return product

    def category_summary(self) -> List[dict]:
        """Product count per category, in order of first appearance."""
        counts: Dict[str, int] = {}
        for product in self.snapshot():
            counts[product.category] = counts.get(product.category, 0) + 1

        return [
            {"id": re.sub(r"\s+", "-", name.lower()), "name": name, "count": count}
            for name, count in counts.items()
        ]

    def status_summary(self) -> List[dict]:
        """Product count per status with its badge colour."""
        counts: Dict[ProductStatus, int] = {}
        for product in self.snapshot():
            counts[product.status] = counts.get(product.status, 0) + 1

        return [
            {
                "id": status.value,
                "name": status.value.capitalize(),
                "count": count,
                "color": STATUS_COLORS[status],
            }
            for status, count in counts.items()
        ]
