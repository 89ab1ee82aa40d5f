"""
Filtering, sorting and pagination over an in-memory product collection.

The pipeline always runs in the same order:

1. category filter (exact match)
2. status filter (exact match)
3. search filter (case-insensitive substring of name, vendor or category)
4. stable sort of the whole filtered set
5. slice to the requested page
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional
import enum
import math

from inventory.models.product import Product
from inventory.services.exceptions import (
    InvalidPaginationError,
    InvalidSortFieldError,
    InvalidSortOrderError,
)


class SortField(str, enum.Enum):
    """Sortable fields, named as they appear on the wire."""
    NAME = "name"
    PRICE = "price"
    STOCK_QUANTITY = "stockQuantity"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"

    @property
    def attribute(self) -> str:
        return _SORT_ATTRIBUTES[self]


_SORT_ATTRIBUTES = {
    SortField.NAME: "name",
    SortField.PRICE: "price",
    SortField.STOCK_QUANTITY: "stock_quantity",
    SortField.CREATED_AT: "created_at",
    SortField.UPDATED_AT: "updated_at",
}


class SortOrder(str, enum.Enum):
    """Sort direction."""
    ASC = "asc"
    DESC = "desc"


@dataclass
class ProductFilters:
    """Optional filters; empty values are treated as absent."""
    category: Optional[str] = None
    status: Optional[str] = None
    search: Optional[str] = None


@dataclass
class ProductSort:
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC


@dataclass
class Pagination:
    page: int = 1
    limit: int = 10


@dataclass
class ProductPage:
    """One page of results plus metadata about the full filtered set."""
    items: List[Product]
    total: int
    page: int
    limit: int
    total_pages: int


def parse_sort(sort_by: str, sort_order: str) -> ProductSort:
    """
    Build a ProductSort from raw strings.

    Raises:
        InvalidSortFieldError: If sort_by is not a sortable field
        InvalidSortOrderError: If sort_order is not 'asc' or 'desc'
    """
    try:
        field = SortField(sort_by)
    except ValueError:
        raise InvalidSortFieldError(f"Invalid sort field: {sort_by}")
    try:
        order = SortOrder(sort_order)
    except ValueError:
        raise InvalidSortOrderError(f"Invalid sort order: {sort_order}")
    return ProductSort(sort_by=field, sort_order=order)


def _status_value(status) -> str:
    return status.value if isinstance(status, enum.Enum) else status


def _matches_search(product: Product, needle: str) -> bool:
    return (
        needle in product.name.lower()
        or needle in product.vendor.lower()
        or needle in product.category.lower()
    )


def query(
    all_products: Iterable[Product],
    filters: ProductFilters,
    sort: ProductSort,
    pagination: Pagination
) -> ProductPage:
    """
    Filter, sort and paginate products.

    Args:
        all_products: Products in collection order (newest first)
        filters: Category, status and search filters
        sort: Sort field and direction
        pagination: 1-indexed page number and page size

    Returns:
        ProductPage with the requested slice. A page past the end is
        empty but still reports the full total and page count.

    Raises:
        InvalidSortFieldError: If the sort field is unknown
        InvalidSortOrderError: If the sort order is unknown
        InvalidPaginationError: If page or limit is below 1
    """
    # Accept raw strings as well as enum members
    sort = parse_sort(sort.sort_by, sort.sort_order)

    if pagination.page < 1 or pagination.limit < 1:
        raise InvalidPaginationError("Invalid pagination parameters")

    filtered = list(all_products)

    if filters.category:
        filtered = [p for p in filtered if p.category == filters.category]

    if filters.status:
        status = _status_value(filters.status)
        filtered = [p for p in filtered if _status_value(p.status) == status]

    if filters.search:
        needle = filters.search.lower()
        filtered = [p for p in filtered if _matches_search(p, needle)]

    # sorted() is stable, also with reverse=True
    attribute = sort.sort_by.attribute
    filtered = sorted(
        filtered,
        key=lambda p: getattr(p, attribute),
        reverse=sort.sort_order == SortOrder.DESC
    )

    total = len(filtered)
    total_pages = math.ceil(total / pagination.limit)
    start = (pagination.page - 1) * pagination.limit
    items = filtered[start:start + pagination.limit]

    return ProductPage(
        items=items,
        total=total,
        page=pagination.page,
        limit=pagination.limit,
        total_pages=total_pages
    )
