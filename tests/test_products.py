"""Tests for Product API endpoints."""
from fastapi.testclient import TestClient

from inventory.main import app


def _create(client, payload, **overrides):
    response = client.post("/api/products", json={**payload, **overrides})
    assert response.status_code == 201
    return response.json()["data"]


def test_create_product(client, product_payload):
    """Test creating a new product."""
    response = client.post("/api/products", json=product_payload)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Product created successfully"

    data = body["data"]
    assert data["id"].startswith("prod-")
    assert data["name"] == "Wireless Mouse"
    assert data["price"] == 24.99
    assert data["stockQuantity"] == 120
    assert data["status"] == "active"
    assert data["createdAt"] == data["updatedAt"]


def test_create_product_defaults(client, product_payload):
    """Test stock, description and image defaults."""
    del product_payload["stockQuantity"]
    del product_payload["description"]

    data = _create(client, product_payload)

    assert data["stockQuantity"] == 0
    assert data["description"] == ""
    assert data["imageUrl"] == "https://picsum.photos/400/400?random=1"


def test_create_product_zero_price(client, product_payload):
    """Test a free product is accepted."""
    data = _create(client, product_payload, price=0)

    assert data["price"] == 0


def test_create_product_missing_vendor(client, store, product_payload):
    """Test creating product without vendor fails and stores nothing."""
    del product_payload["vendor"]

    response = client.post("/api/products", json=product_payload)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "vendor" in body["message"]
    assert "data" not in body
    assert store.count() == 0


def test_create_product_invalid_price(client, product_payload):
    """Test creating product with negative price fails."""
    response = client.post("/api/products", json={**product_payload, "price": -10.00})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid price"


def test_create_product_non_numeric_price(client, product_payload):
    """Test creating product with a non-numeric price fails."""
    response = client.post("/api/products", json={**product_payload, "price": "cheap"})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid price"


def test_create_product_invalid_stock(client, product_payload):
    """Test creating product with negative stock fails."""
    response = client.post("/api/products", json={**product_payload, "stockQuantity": -5})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid stock quantity"


def test_create_product_boolean_price(client, store, product_payload):
    """Test a JSON boolean is not accepted as a price."""
    response = client.post("/api/products", json={**product_payload, "price": True})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid price"
    assert store.count() == 0


def test_create_product_boolean_stock(client, store, product_payload):
    """Test a JSON boolean is not accepted as a stock quantity."""
    response = client.post("/api/products", json={**product_payload, "stockQuantity": True})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid stock quantity"
    assert store.count() == 0


def test_update_product_boolean_price(client, product_payload):
    """Test a JSON boolean price is rejected on update too."""
    created = _create(client, product_payload)

    response = client.put(f"/api/products/{created['id']}", json={"price": False})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid price"


def test_create_product_invalid_status(client, product_payload):
    """Test creating product with an unknown status fails."""
    response = client.post("/api/products", json={**product_payload, "status": "archived"})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid status"


def test_create_product_malformed_body(client):
    """Test a body that is not JSON is rejected with 400."""
    response = client.post(
        "/api/products",
        content="not json",
        headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_get_product(client, product_payload):
    """Test getting a product by ID."""
    created = _create(client, product_payload)

    response = client.get(f"/api/products/{created['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Product retrieved successfully"
    assert body["data"] == created


def test_get_product_not_found(client):
    """Test getting non-existent product returns 404."""
    response = client.get("/api/products/prod-missing")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Product not found"}


def test_list_products(client, product_payload):
    """Test listing products with pagination."""
    for i in range(15):
        _create(client, product_payload, name=f"Product {i}", price=10.00 + i)

    response = client.get("/api/products?page=1&limit=10")

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["items"]) == 10
    assert data["total"] == 15
    assert data["page"] == 1
    assert data["limit"] == 10
    assert data["totalPages"] == 2


def test_list_products_newest_first_by_default(client, product_payload):
    """Test default ordering puts the latest product first."""
    for name in ["First", "Second", "Third"]:
        _create(client, product_payload, name=name)

    items = client.get("/api/products").json()["data"]["items"]

    assert [p["name"] for p in items] == ["Third", "Second", "First"]


def test_list_products_sort_by_price(client, product_payload):
    """Test sorting by price and paging through the result."""
    for price in [10, 30, 20]:
        _create(client, product_payload, price=price)

    response = client.get("/api/products?sortBy=price&sortOrder=asc&page=1&limit=2")

    data = response.json()["data"]
    assert [p["price"] for p in data["items"]] == [10, 20]
    assert data["total"] == 3
    assert data["totalPages"] == 2


def test_list_products_filters(client, product_payload):
    """Test category, status and search filters together."""
    _create(client, product_payload, name="Desk Lamp", category="Home & Garden", vendor="HomeStyle")
    _create(client, product_payload, name="Garden Hose", category="Home & Garden", status="inactive")
    _create(client, product_payload, name="Keyboard", vendor="HomeStyle")

    response = client.get(
        "/api/products",
        params={"category": "Home & Garden", "status": "active", "search": "homestyle"}
    )

    data = response.json()["data"]
    assert data["total"] == 1
    assert data["items"][0]["name"] == "Desk Lamp"


def test_list_products_page_out_of_range(client, product_payload):
    """Test a page past the end is empty but keeps the totals."""
    for _ in range(3):
        _create(client, product_payload)

    response = client.get("/api/products?page=5&limit=2")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["items"] == []
    assert data["total"] == 3
    assert data["totalPages"] == 2


def test_list_products_invalid_pagination(client):
    """Test page and limit bounds."""
    for query in ["page=0", "limit=0", "limit=101", "page=abc"]:
        response = client.get(f"/api/products?{query}")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid pagination parameters"


def test_list_products_invalid_sort_field(client):
    """Test sorting by an unknown field is rejected."""
    response = client.get("/api/products?sortBy=color")

    assert response.status_code == 400
    assert response.json()["message"].startswith("Invalid sort field")


def test_list_products_invalid_sort_order(client):
    """Test an unknown sort direction is rejected."""
    response = client.get("/api/products?sortOrder=sideways")

    assert response.status_code == 400
    assert response.json()["message"].startswith("Invalid sort order")


def test_update_product(client, product_payload):
    """Test updating a product."""
    created = _create(client, product_payload)

    response = client.put(
        f"/api/products/{created['id']}",
        json={"name": "Updated Name", "price": 75.00}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == created["id"]
    assert data["name"] == "Updated Name"
    assert data["price"] == 75.00
    assert data["stockQuantity"] == 120  # Stock should remain unchanged
    assert data["createdAt"] == created["createdAt"]


def test_update_product_null_fields_ignored(client, product_payload):
    """Test null values in a patch do not clear existing fields."""
    created = _create(client, product_payload)

    response = client.put(
        f"/api/products/{created['id']}",
        json={"vendor": None, "stockQuantity": 7}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["vendor"] == "TechCorp"
    assert data["stockQuantity"] == 7


def test_update_product_invalid(client, product_payload):
    """Test an update producing an invalid record is rejected."""
    created = _create(client, product_payload)

    response = client.put(f"/api/products/{created['id']}", json={"name": "  "})

    assert response.status_code == 400
    assert client.get(f"/api/products/{created['id']}").json()["data"] == created


def test_update_product_not_found(client, store, product_payload):
    """Test updating an unknown id returns 404 and changes nothing."""
    created = _create(client, product_payload)

    response = client.put("/api/products/prod-missing", json={"name": "Ghost"})

    assert response.status_code == 404
    assert [p.name for p in store.snapshot()] == [created["name"]]


def test_update_keeps_list_position(client, product_payload):
    """Test an updated product keeps its place in the default listing."""
    first = _create(client, product_payload, name="First")
    _create(client, product_payload, name="Second")

    client.put(f"/api/products/{first['id']}", json={"name": "First (edited)"})

    response = client.get("/api/products?sortBy=createdAt&sortOrder=desc")
    names = [p["name"] for p in response.json()["data"]["items"]]
    assert names == ["Second", "First (edited)"]


def test_delete_product(client, product_payload):
    """Test deleting a product."""
    created = _create(client, product_payload)

    response = client.delete(f"/api/products/{created['id']}")
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Product deleted successfully"
    assert body["data"]["id"] == created["id"]

    # Verify it's deleted
    get_response = client.get(f"/api/products/{created['id']}")
    assert get_response.status_code == 404


def test_delete_product_not_found(client):
    """Test deleting an unknown id returns 404."""
    response = client.delete("/api/products/prod-missing")

    assert response.status_code == 404


def test_unexpected_error_is_hidden(store, product_payload, monkeypatch):
    """Test unexpected failures return a generic 500 message."""
    from inventory.dependencies import get_store

    def explode(*args, **kwargs):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(store, "get", explode)
    app.dependency_overrides[get_store] = lambda: store
    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/products/prod-001")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal server error"}
