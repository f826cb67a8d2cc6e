"""
Catalog Lookup Client

Read-only access to the product catalog service. The cart only needs one
call: look a SKU up and get its name, price, image and stock.
"""

import math
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional, Protocol
from urllib.parse import quote

import httpx

from core.errors import CatalogUnavailableError
from core.logging import get_logger, sanitize_for_logging
from core.services.money import to_decimal

logger = get_logger(__name__)

CATALOG_SERVICE_URL = os.environ.get("CATALOG_SERVICE_URL", "http://localhost:8001")


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if math.isfinite(value) and value > 0 else default


CATALOG_TIMEOUT_SECONDS = _float_env("CATALOG_TIMEOUT_SECONDS", 5.0)


@dataclass
class CatalogProduct:
    """Catalog data for one SKU at lookup time."""

    sku: str
    name: str
    price: Decimal
    image_url: str
    stock_quantity: int

    @classmethod
    def from_dict(cls, sku: str, data: dict) -> "CatalogProduct":
        stock = data["stock_quantity"]
        if isinstance(stock, bool) or not isinstance(stock, int):
            raise ValueError(f"invalid stock_quantity {stock!r}")
        return cls(
            sku=str(data.get("sku") or sku),
            name=str(data["name"]),
            price=to_decimal(data["price"]),
            image_url=str(data.get("image_url") or ""),
            stock_quantity=stock,
        )


class CatalogLookup(Protocol):
    """What the cart manager needs from a catalog."""

    async def lookup(self, sku: str) -> Optional[CatalogProduct]:
        """Return the product, None when the SKU is unknown; raise CatalogUnavailableError otherwise."""
        ...


class CatalogClient:
    """HTTP client for the catalog service (`GET /products/{sku}`)."""

    def __init__(
        self,
        base_url: str = CATALOG_SERVICE_URL,
        timeout: float = CATALOG_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._http_client: httpx.AsyncClient | None = None

    def _get_http_client(self) -> httpx.AsyncClient:
        """Lazy creation of shared httpx client with timeouts."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 5.0)),
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
                transport=self._transport,
            )
        return self._http_client

    async def lookup(self, sku: str) -> Optional[CatalogProduct]:
        safe_sku = sanitize_for_logging(sku)
        client = self._get_http_client()
        try:
            response = await client.get(f"/products/{quote(sku, safe='')}")
        except httpx.RequestError as e:
            logger.error(f"Catalog network error for SKU {safe_sku}: {e!r}")
            raise CatalogUnavailableError(f"Failed to reach catalog: {e!s}") from e

        if response.status_code == 404:
            logger.info(f"Catalog has no product for SKU {safe_sku}")
            return None
        if response.status_code != 200:
            logger.error(f"Catalog returned {response.status_code} for SKU {safe_sku}")
            raise CatalogUnavailableError(f"Catalog returned status {response.status_code}")

        try:
            data = response.json()
            if isinstance(data, dict) and isinstance(data.get("product"), dict):
                data = data["product"]
            return CatalogProduct.from_dict(sku, data)
        except (ValueError, KeyError, TypeError, InvalidOperation) as e:
            logger.error(f"Malformed catalog response for SKU {safe_sku}: {e}")
            raise CatalogUnavailableError(f"Malformed catalog response: {e}") from e

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
