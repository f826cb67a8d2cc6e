"""
Redis Module - Upstash client, key layout and TTLs

Provides the async Upstash Redis client that backs cart storage, plus the
key naming and expiry constants shared by the cart store.
"""

import os
from typing import Optional

from upstash_redis.asyncio import Redis as AsyncRedis


# Upstash uses REST_URL and REST_TOKEN
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

_redis_client: Optional[AsyncRedis] = None


def get_redis() -> AsyncRedis:
    """
    Get async Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _redis_client

    if _redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = AsyncRedis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


async def close_redis() -> None:
    """Close the shared Redis client, if one was created."""
    global _redis_client
    if _redis_client is not None:
        await _redis_client.close()
        _redis_client = None


class RedisKeys:
    """Redis key prefixes for different data types."""

    # Hash per user: field = SKU, value = JSON entry
    CART = "cart:"  # cart:{user_id}

    @staticmethod
    def cart_key(user_id: int) -> str:
        return f"{RedisKeys.CART}{user_id}"


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


class TTL:
    """Time-to-live constants for Redis keys (seconds)."""

    CART = _int_env("CART_TTL_SECONDS", 86400)  # idle window, default 24 hours
