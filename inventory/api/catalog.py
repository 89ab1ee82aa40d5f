from fastapi import APIRouter, Depends

from inventory.dependencies import get_store
from inventory.services.product_store import ProductStore
from inventory.schemas.product import CategorySummary, StatusSummary
from inventory.schemas.response import ApiResponse

router = APIRouter(tags=["Catalog"])


@router.get(
    "/categories",
    response_model=ApiResponse[list[CategorySummary]],
    summary="Category counts",
    description="Number of products in each category currently in the store."
)
def list_categories(store: ProductStore = Depends(get_store)):
    """Categories in order of first appearance."""
    return ApiResponse[list[CategorySummary]](
        success=True,
        message="Categories retrieved successfully",
        data=[CategorySummary(**c) for c in store.category_summary()]
    )


@router.get(
    "/statuses",
    response_model=ApiResponse[list[StatusSummary]],
    summary="Status counts",
    description="Number of products per status, with the badge colour for each."
)
def list_statuses(store: ProductStore = Depends(get_store)):
    return ApiResponse[list[StatusSummary]](
        success=True,
        message="Statuses retrieved successfully",
        data=[StatusSummary(**s) for s in store.status_summary()]
    )
