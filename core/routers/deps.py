"""
Shared Dependencies for Routers

Leaf clients (Redis, catalog HTTP client) are long-lived and created lazily.
The cart manager itself is built per request from them.
"""

from typing import Optional, TYPE_CHECKING

from core.db import TTL, close_redis, get_redis

if TYPE_CHECKING:
    from core.cart import CartManager
    from core.services.catalog import CatalogClient


_catalog_client: Optional["CatalogClient"] = None


def get_catalog_client() -> "CatalogClient":
    """Get or create the shared CatalogClient (lazy loaded)"""
    global _catalog_client
    if _catalog_client is None:
        from core.services.catalog import CatalogClient
        _catalog_client = CatalogClient()
    return _catalog_client


def get_cart_manager() -> "CartManager":
    """Build a CartManager with explicit store, catalog and TTL."""
    from core.cart import CartManager, CartStore
    return CartManager(
        store=CartStore(get_redis()),
        catalog=get_catalog_client(),
        ttl_seconds=TTL.CART,
    )


async def shutdown_services():
    """Cleanly close leaf clients (http client, Redis)."""
    global _catalog_client
    if _catalog_client is not None:
        try:
            await _catalog_client.aclose()
        finally:
            _catalog_client = None
    await close_redis()
