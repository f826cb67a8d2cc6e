"""
Cart Service Core Module

This package contains the core components:
- db: Upstash Redis client, key layout and TTLs
- cart: cart models, Redis hash store and cart manager
- services: catalog lookup client and money helpers
- routers: FastAPI request adapter

Note: Imports are lazy so importing `core` does not pull in FastAPI or the
Redis client.
"""

__all__ = [
    "get_redis",
    "CartManager",
    "CartStore",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "get_redis":
        from core.db import get_redis
        return get_redis
    elif name == "CartManager":
        from core.cart import CartManager
        return CartManager
    elif name == "CartStore":
        from core.cart import CartStore
        return CartStore
    raise AttributeError(f"module 'core' has no attribute '{name}'")
