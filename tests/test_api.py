"""Tests for API endpoints"""
import pytest
from fastapi.testclient import TestClient

from api.index import app
from core.cart import CartManager
from core.errors import ERROR_INVALID_QUANTITY, ERROR_INVALID_SKU
from core.routers.deps import get_cart_manager

HEADERS = {"X-User-Id": "42"}


@pytest.fixture
def client(cart_manager):
    """Test client with the cart manager wired to in-memory doubles"""
    app.dependency_overrides[get_cart_manager] = lambda: cart_manager
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_check(client):
    """Test health endpoint."""
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.parametrize("headers", [{}, {"X-User-Id": "abc"}, {"X-User-Id": "0"}, {"X-User-Id": "-5"}])
def test_missing_or_invalid_identity(client, fake_redis, headers):
    """Test requests without a valid user id never reach the store."""
    response = client.get("/api/cart", headers=headers)

    assert response.status_code == 401
    assert fake_redis.calls == []


def test_get_empty_cart(client):
    """Test reading a cart that was never written."""
    response = client.get("/api/cart", headers=HEADERS)

    assert response.status_code == 200
    assert response.json() == {"items": [], "total_price": 0.0, "total_items": 0}


def test_cart_lifecycle(client):
    """Test add, read, update and remove over HTTP."""
    response = client.post("/api/cart/items", json={"sku": "SKU-1", "quantity": 2}, headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["item"] == {
        "sku": "SKU-1",
        "quantity": 2,
        "price": 10.0,
        "name": "Coffee Beans",
        "image_url": "https://img.test/SKU-1.png",
        "item_total_price": 20.0,
    }

    response = client.get("/api/cart", headers=HEADERS)
    body = response.json()
    assert body["total_price"] == 20.0
    assert body["total_items"] == 2

    response = client.patch("/api/cart/items/SKU-1", json={"quantity": 5}, headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["item"]["item_total_price"] == 50.0

    response = client.delete("/api/cart/items/SKU-1", headers=HEADERS)
    assert response.status_code == 200

    response = client.get("/api/cart", headers=HEADERS)
    assert response.json()["items"] == []


@pytest.mark.parametrize("payload, status", [
    ({"sku": "SKU-1", "quantity": 0}, 400),
    ({"sku": "", "quantity": 1}, 400),
    ({"sku": "SKU-MISSING", "quantity": 1}, 404),
    ({"sku": "SKU-2", "quantity": 4}, 409),
])
def test_add_item_error_mapping(client, payload, status):
    """Test cart errors map to their HTTP status."""
    response = client.post("/api/cart/items", json=payload, headers=HEADERS)

    assert response.status_code == status


def test_business_errors_expose_reason(client):
    """Test client-side errors carry their message."""
    response = client.post("/api/cart/items", json={"sku": "SKU-2", "quantity": 4}, headers=HEADERS)

    assert "Insufficient stock" in response.json()["detail"]


def test_update_item_not_in_cart(client):
    """Test updating an item that was never added."""
    response = client.patch("/api/cart/items/SKU-1", json={"quantity": 1}, headers=HEADERS)

    assert response.status_code == 404
    assert response.json()["detail"] == "Item SKU-1 not found in cart"


def test_store_failure_does_not_leak(client, fake_redis):
    """Test store failures return a generic 500."""
    fake_redis.fail_on = {"hgetall"}

    response = client.get("/api/cart", headers=HEADERS)

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"
    assert "connection refused" not in response.text


def test_corrupt_entry_does_not_leak(client, fake_redis):
    """Test corrupt entries return a generic 500."""
    fake_redis.hashes["cart:42"] = {"SKU-1": "garbage"}

    response = client.get("/api/cart", headers=HEADERS)

    assert response.status_code == 500
    assert "garbage" not in response.text


def test_catalog_failure_is_internal(client, catalog):
    """Test catalog failures return a generic 500."""
    from core.errors import CatalogUnavailableError
    catalog.error = CatalogUnavailableError("Catalog returned status 503")

    response = client.post("/api/cart/items", json={"sku": "SKU-1", "quantity": 1}, headers=HEADERS)

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"


def test_remove_and_clear_are_idempotent(client):
    """Test deletes succeed when nothing is there."""
    assert client.delete("/api/cart/items/SKU-9", headers=HEADERS).status_code == 200
    assert client.delete("/api/cart", headers=HEADERS).status_code == 200
    assert client.delete("/api/cart", headers=HEADERS).status_code == 200


def test_get_cart_manager_builds_with_explicit_dependencies(monkeypatch):
    """Test the manager is built from the shared Redis and catalog clients."""
    from core.routers import deps

    sentinel_redis = object()
    monkeypatch.setattr(deps, "get_redis", lambda: sentinel_redis)

    manager = get_cart_manager()

    assert isinstance(manager, CartManager)
    assert manager.store.redis is sentinel_redis
    assert manager.catalog is deps.get_catalog_client()
    assert manager.ttl_seconds == deps.TTL.CART


def test_sku_with_slash_can_be_updated_and_removed(client, catalog):
    """Test a SKU containing '/' is reachable through the item routes."""
    catalog.put("AB/12", "3.00", stock=5)
    assert client.post("/api/cart/items", json={"sku": "AB/12", "quantity": 1}, headers=HEADERS).status_code == 200

    response = client.patch("/api/cart/items/AB%2F12", json={"quantity": 2}, headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["item"]["sku"] == "AB/12"
    assert response.json()["item"]["quantity"] == 2

    assert client.delete("/api/cart/items/AB%2F12", headers=HEADERS).status_code == 200
    assert client.get("/api/cart", headers=HEADERS).json()["items"] == []


@pytest.mark.parametrize("quantity", [True, 1.5, "abc", None, "2"])
def test_add_item_rejects_non_integer_quantity(client, fake_redis, quantity):
    """Test quantities that are not JSON integers are an invalid-quantity 400."""
    response = client.post("/api/cart/items", json={"sku": "SKU-1", "quantity": quantity}, headers=HEADERS)

    assert response.status_code == 400
    assert response.json()["detail"] == ERROR_INVALID_QUANTITY
    assert fake_redis.hashes == {}


@pytest.mark.parametrize("quantity", [True, 1.5, "abc"])
def test_update_item_rejects_non_integer_quantity(client, fake_redis, quantity):
    """Test update applies the same quantity rules and leaves the entry alone."""
    client.post("/api/cart/items", json={"sku": "SKU-1", "quantity": 3}, headers=HEADERS)

    response = client.patch("/api/cart/items/SKU-1", json={"quantity": quantity}, headers=HEADERS)

    assert response.status_code == 400
    assert response.json()["detail"] == ERROR_INVALID_QUANTITY
    assert client.get("/api/cart", headers=HEADERS).json()["items"][0]["quantity"] == 3


def test_add_item_rejects_non_string_sku(client):
    """Test a numeric SKU is an invalid-SKU 400."""
    response = client.post("/api/cart/items", json={"sku": 123, "quantity": 1}, headers=HEADERS)

    assert response.status_code == 400
    assert response.json()["detail"] == ERROR_INVALID_SKU


def test_add_item_missing_field(client):
    """Test a body without quantity is rejected by request validation."""
    response = client.post("/api/cart/items", json={"sku": "SKU-1"}, headers=HEADERS)

    assert response.status_code == 422
