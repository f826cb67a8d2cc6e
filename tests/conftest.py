"""Pytest configuration and fixtures"""
import os
from decimal import Decimal

import pytest

# Set test environment variables
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")
os.environ.setdefault("CATALOG_SERVICE_URL", "http://catalog.test")

from core.cart import CartManager, CartStore  # noqa: E402
from core.services.catalog import CatalogProduct  # noqa: E402

TEST_TTL = 3600


class FakeRedis:
    """In-memory stand-in for the async Upstash client: hashes, TTLs and failure injection."""

    def __init__(self):
        self.hashes: dict[str, dict[str, str]] = {}
        self.ttls: dict[str, int] = {}
        self.calls: list[tuple] = []
        self.fail_on: set[str] = set()

    def _record(self, op, *args):
        self.calls.append((op, *args))
        if op in self.fail_on:
            raise ConnectionError(f"redis {op} failed: connection refused")

    def ops(self) -> list[str]:
        return [call[0] for call in self.calls]

    def _drop_if_empty(self, key):
        if key in self.hashes and not self.hashes[key]:
            del self.hashes[key]
            self.ttls.pop(key, None)

    async def hgetall(self, key):
        self._record("hgetall", key)
        return dict(self.hashes.get(key, {}))

    async def hget(self, key, field):
        self._record("hget", key, field)
        return self.hashes.get(key, {}).get(field)

    async def hset(self, key, field, value):
        self._record("hset", key, field, value)
        bucket = self.hashes.setdefault(key, {})
        created = field not in bucket
        bucket[field] = value
        return int(created)

    async def hdel(self, key, *fields):
        self._record("hdel", key, *fields)
        bucket = self.hashes.get(key, {})
        removed = sum(1 for f in fields if bucket.pop(f, None) is not None)
        self._drop_if_empty(key)
        return removed

    async def delete(self, *keys):
        self._record("delete", *keys)
        removed = 0
        for key in keys:
            if self.hashes.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed

    async def expire(self, key, seconds):
        self._record("expire", key, seconds)
        if key not in self.hashes:
            return 0
        self.ttls[key] = seconds
        return 1

    async def ttl(self, key):
        self._record("ttl", key)
        if key not in self.hashes:
            return -2
        return self.ttls.get(key, -1)


class InMemoryCatalog:
    """Catalog double recording every lookup."""

    def __init__(self):
        self.products: dict[str, CatalogProduct] = {}
        self.lookups: list[str] = []
        self.error: Exception | None = None

    def put(self, sku, price, stock, name=None, image_url=None):
        self.products[sku] = CatalogProduct(
            sku=sku,
            name=name or f"Product {sku}",
            price=Decimal(str(price)),
            image_url=image_url or f"https://img.test/{sku}.png",
            stock_quantity=stock,
        )
        return self.products[sku]

    async def lookup(self, sku):
        self.lookups.append(sku)
        if self.error is not None:
            raise self.error
        return self.products.get(sku)


@pytest.fixture
def fake_redis():
    """In-memory Redis double"""
    return FakeRedis()


@pytest.fixture
def catalog():
    """Catalog with a few products"""
    catalog = InMemoryCatalog()
    catalog.put("SKU-1", "10.00", stock=10, name="Coffee Beans")
    catalog.put("SKU-2", "4.50", stock=3, name="Paper Filters")
    catalog.put("SKU-EMPTY", "7.00", stock=0, name="Sold Out Mug")
    return catalog


@pytest.fixture
def store(fake_redis):
    return CartStore(fake_redis)


@pytest.fixture
def cart_manager(store, catalog):
    """CartManager wired to the in-memory doubles"""
    return CartManager(store=store, catalog=catalog, ttl_seconds=TEST_TTL)


@pytest.fixture
def user_id():
    return 42
