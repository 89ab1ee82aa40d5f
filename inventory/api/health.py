from fastapi import APIRouter, Depends

from inventory.dependencies import get_store
from inventory.services.product_store import ProductStore

router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "",
    summary="Health check",
    description="Basic health check endpoint."
)
def health_check():
    """Simple health check."""
    return {"status": "healthy"}


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check that the product store is available."
)
def readiness_check(store: ProductStore = Depends(get_store)):
    """
    Readiness check.

    Returns the number of products currently held by the store.
    """
    return {
        "status": "ready",
        "checks": {"store": True, "products": store.count()}
    }
