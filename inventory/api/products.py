from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional

from inventory.config import get_settings
from inventory.dependencies import get_store
from inventory.services.exceptions import ProductNotFoundError, ProductValidationError
from inventory.services.product_store import ProductStore
from inventory.services.query_engine import Pagination, ProductFilters, parse_sort
from inventory.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse
)
from inventory.schemas.response import ApiResponse

settings = get_settings()

router = APIRouter(prefix="/products", tags=["Products"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Product not found"
    )


def _bad_request(e: ProductValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=str(e)
    )


@router.get(
    "",
    response_model=ApiResponse[ProductListResponse],
    summary="List products",
    description="Get a filtered, sorted and paginated list of products."
)
def list_products(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(
        settings.DEFAULT_PAGE_SIZE,
        ge=1,
        le=settings.MAX_PAGE_SIZE,
        description="Items per page"
    ),
    sort_by: str = Query("createdAt", alias="sortBy", description="Field to sort by"),
    sort_order: str = Query("desc", alias="sortOrder", description="asc or desc"),
    category: Optional[str] = Query(None, description="Exact category"),
    status_filter: Optional[str] = Query(None, alias="status", description="Exact status"),
    search: Optional[str] = Query(None, description="Search name, vendor and category"),
    store: ProductStore = Depends(get_store)
):
    """
    Get a page of products.

    Filters are applied in order (category, status, search), then the
    whole filtered set is sorted, then sliced to the requested page.
    """
    try:
        result = store.list(
            ProductFilters(category=category, status=status_filter, search=search),
            parse_sort(sort_by, sort_order),
            Pagination(page=page, limit=limit)
        )
    except ProductValidationError as e:
        raise _bad_request(e)

    return ApiResponse[ProductListResponse](
        success=True,
        message="Products retrieved successfully",
        data=ProductListResponse(
            items=[ProductResponse.model_validate(p) for p in result.items],
            total=result.total,
            page=result.page,
            limit=result.limit,
            total_pages=result.total_pages
        )
    )


@router.post(
    "",
    response_model=ApiResponse[ProductResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    description="Create a product. The server assigns id and timestamps."
)
def create_product(
    product_data: ProductCreate,
    store: ProductStore = Depends(get_store)
):
    """
    Create a new product.

    - **name**, **price**, **category**, **status**, **vendor**: required
    - **stockQuantity**: defaults to 0
    - **imageUrl**: defaults to a placeholder for the category
    """
    try:
        product = store.create(product_data)
    except ProductValidationError as e:
        raise _bad_request(e)

    return ApiResponse[ProductResponse](
        success=True,
        message="Product created successfully",
        data=ProductResponse.model_validate(product)
    )


@router.get(
    "/{product_id}",
    response_model=ApiResponse[ProductResponse],
    summary="Get product by ID"
)
def get_product(
    product_id: str,
    store: ProductStore = Depends(get_store)
):
    """Get a product by ID."""
    try:
        product = store.get(product_id)
    except ProductNotFoundError:
        raise _not_found()

    return ApiResponse[ProductResponse](
        success=True,
        message="Product retrieved successfully",
        data=ProductResponse.model_validate(product)
    )


@router.put(
    "/{product_id}",
    response_model=ApiResponse[ProductResponse],
    summary="Update a product",
    description="Update product details. Only provided fields will be updated."
)
def update_product(
    product_id: str,
    product_data: ProductUpdate,
    store: ProductStore = Depends(get_store)
):
    """
    Update a product.

    Partial updates are supported - only include fields you want to change.
    The id and creation time never change.
    """
    try:
        product = store.update(product_id, product_data)
    except ProductNotFoundError:
        raise _not_found()
    except ProductValidationError as e:
        raise _bad_request(e)

    return ApiResponse[ProductResponse](
        success=True,
        message="Product updated successfully",
        data=ProductResponse.model_validate(product)
    )


@router.delete(
    "/{product_id}",
    response_model=ApiResponse[ProductResponse],
    summary="Delete a product",
    description="Delete a product by ID and return the removed record."
)
def delete_product(
    product_id: str,
    store: ProductStore = Depends(get_store)
):
    """Delete a product."""
    try:
        product = store.delete(product_id)
    except ProductNotFoundError:
        raise _not_found()

    return ApiResponse[ProductResponse](
        success=True,
        message="Product deleted successfully",
        data=ProductResponse.model_validate(product)
    )
