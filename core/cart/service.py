"""Cart manager: validation, catalog snapshotting and TTL policy over the cart store."""
from core.errors import (
    InsufficientStockError,
    InvalidQuantityError,
    InvalidSKUError,
    ItemNotFoundError,
    ProductNotFoundError,
)
from core.logging import get_logger, sanitize_for_logging
from core.services.catalog import CatalogLookup, CatalogProduct
from .models import CartEntry, CartView
from .storage import CartStore

logger = get_logger(__name__)


class CartManager:
    """
    Manages per-user carts stored as Redis hashes.

    Stateless between calls: everything lives in the store. Dependencies are
    passed in explicitly so each caller decides which store, catalog and TTL
    to use.

    Validation order for mutations is cheap local checks, then the store
    existence check (update only), then the catalog round-trip.

    Mutations of the same SKU are read-then-write without compare-and-swap,
    so concurrent updates resolve as last write wins.

    Usage:
        manager = CartManager(CartStore(get_redis()), CatalogClient(), TTL.CART)
        entry = await manager.add_item(user_id, "SKU-1", 2)
        cart = await manager.get_cart(user_id)
    """

    def __init__(self, store: CartStore, catalog: CatalogLookup, ttl_seconds: int):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.store = store
        self.catalog = catalog
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def _validate(sku: str, quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidQuantityError()
        if not isinstance(sku, str) or not sku.strip():
            raise InvalidSKUError()

    async def _lookup_in_stock(self, sku: str, quantity: int) -> CatalogProduct:
        product = await self.catalog.lookup(sku)
        if product is None:
            raise ProductNotFoundError(f"Product {sku} not found")
        if product.stock_quantity < quantity:
            raise InsufficientStockError(
                f"Insufficient stock for product {sku}: "
                f"requested {quantity}, available {product.stock_quantity}"
            )
        return product

    async def _persist(self, user_id: int, entry: CartEntry) -> None:
        await self.store.set_field(user_id, entry.sku, entry.to_payload())
        await self.store.expire(user_id, self.ttl_seconds)

    async def get_cart(self, user_id: int) -> CartView:
        """
        Read every entry of the user's cart and aggregate totals.

        Raises:
            StoreUnavailableError: the read failed
            CorruptEntryError: any stored entry cannot be decoded (no partial result)
        """
        fields = await self.store.get_all(user_id)
        entries = [CartEntry.from_payload(sku, payload) for sku, payload in fields.items()]
        return CartView.from_entries(user_id, entries)

    async def add_item(self, user_id: int, sku: str, quantity: int) -> CartEntry:
        """
        Put `quantity` units of `sku` in the cart, replacing any existing entry.

        Adding the same SKU twice with quantity 3 leaves quantity 3.
        Refreshes the cart TTL.
        """
        self._validate(sku, quantity)
        product = await self._lookup_in_stock(sku, quantity)

        entry = CartEntry.snapshot(sku, quantity, product)
        await self._persist(user_id, entry)

        logger.info(
            f"Cart {user_id}: set {sanitize_for_logging(sku)} x{quantity} "
            f"at {entry.unit_price} (line total {entry.line_total})"
        )
        return entry

    async def update_item_quantity(self, user_id: int, sku: str, quantity: int) -> CartEntry:
        """
        Change the quantity of an entry that is already in the cart.

        Price, name and image are re-read from the catalog, not carried over.
        Refreshes the cart TTL.

        Raises:
            ItemNotFoundError: the SKU is not in this user's cart (checked before the catalog)
        """
        self._validate(sku, quantity)

        existing = await self.store.get_field(user_id, sku)
        if existing is None:
            raise ItemNotFoundError(f"Item {sku} not found in cart")
        previous = CartEntry.from_payload(sku, existing)

        product = await self._lookup_in_stock(sku, quantity)

        entry = CartEntry.snapshot(sku, quantity, product)
        await self._persist(user_id, entry)

        logger.info(
            f"Cart {user_id}: updated {sanitize_for_logging(sku)} "
            f"x{previous.quantity} -> x{quantity} at {entry.unit_price}"
        )
        return entry

    async def remove_item(self, user_id: int, sku: str) -> None:
        """Remove one entry. Absence is not an error; the TTL is left alone."""
        await self.store.delete_field(user_id, sku)
        logger.info(f"Cart {user_id}: removed {sanitize_for_logging(sku)}")

    async def clear_cart(self, user_id: int) -> None:
        """Delete the whole cart. Absence is not an error."""
        await self.store.delete(user_id)
        logger.info(f"Cart {user_id}: cleared")
