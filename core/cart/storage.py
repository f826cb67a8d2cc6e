"""Redis hash access for carts: one hash per user, field = SKU, value = opaque payload."""
from typing import Dict, Optional

from core.db import RedisKeys
from core.errors import StoreUnavailableError
from core.logging import get_logger

logger = get_logger(__name__)


class CartStore:
    """
    Thin adapter over the async Redis client.

    No business logic and no retries: every client failure is re-raised as
    StoreUnavailableError with the original exception chained.
    """

    def __init__(self, redis):
        self.redis = redis

    @staticmethod
    def key(user_id: int) -> str:
        return RedisKeys.cart_key(user_id)

    def _unavailable(self, op: str, user_id: int, exc: Exception) -> StoreUnavailableError:
        logger.error(f"Cart store {op} failed for user {user_id}: {exc}")
        return StoreUnavailableError(f"Cart store {op} failed: {exc}")

    async def get_all(self, user_id: int) -> Dict[str, str]:
        """All fields of the user's cart hash; empty dict when the key does not exist."""
        try:
            result = await self.redis.hgetall(self.key(user_id))
        except Exception as e:
            raise self._unavailable("hgetall", user_id, e) from e
        return dict(result or {})

    async def get_field(self, user_id: int, sku: str) -> Optional[str]:
        try:
            return await self.redis.hget(self.key(user_id), sku)
        except Exception as e:
            raise self._unavailable("hget", user_id, e) from e

    async def set_field(self, user_id: int, sku: str, payload: str) -> None:
        try:
            await self.redis.hset(self.key(user_id), sku, payload)
        except Exception as e:
            raise self._unavailable("hset", user_id, e) from e

    async def delete_field(self, user_id: int, sku: str) -> None:
        try:
            await self.redis.hdel(self.key(user_id), sku)
        except Exception as e:
            raise self._unavailable("hdel", user_id, e) from e

    async def delete(self, user_id: int) -> None:
        try:
            await self.redis.delete(self.key(user_id))
        except Exception as e:
            raise self._unavailable("delete", user_id, e) from e

    async def expire(self, user_id: int, seconds: int) -> None:
        try:
            await self.redis.expire(self.key(user_id), seconds)
        except Exception as e:
            raise self._unavailable("expire", user_id, e) from e

    async def ttl(self, user_id: int) -> int:
        """Remaining TTL in seconds (-1 no expiry, -2 missing key)."""
        try:
            return await self.redis.ttl(self.key(user_id))
        except Exception as e:
            raise self._unavailable("ttl", user_id, e) from e
