from fastapi import Request

from inventory.services.product_store import ProductStore


def get_store(request: Request) -> ProductStore:
    """
    Dependency to get the product store.
    The store is created at startup and lives on the application state.
    """
    return request.app.state.store
