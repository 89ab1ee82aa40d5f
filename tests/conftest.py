import pytest
from fastapi.testclient import TestClient

from inventory.main import app
from inventory.dependencies import get_store
from inventory.services.product_store import ProductStore


@pytest.fixture(scope="function")
def store():
    """Fresh, empty product store for each test."""
    return ProductStore()


@pytest.fixture(scope="function")
def client(store):
    """Create test client backed by the per-test store."""
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def product_payload():
    """Valid draft for POST /api/products."""
    return {
        "name": "Wireless Mouse",
        "price": 24.99,
        "stockQuantity": 120,
        "category": "Electronics",
        "status": "active",
        "vendor": "TechCorp",
        "description": "Compact mouse with USB receiver",
    }
