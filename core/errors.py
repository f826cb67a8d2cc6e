"""
Cart Error Kinds

Centralized error messages and the exception hierarchy raised by the cart core.
Each error carries the HTTP status class the request adapter maps it to.
"""

# Input errors
ERROR_INVALID_QUANTITY = "Quantity must be a positive integer"
ERROR_INVALID_SKU = "SKU must be a non-empty string"

# Lookup errors
ERROR_ITEM_NOT_FOUND = "Item not found in cart"
ERROR_PRODUCT_NOT_FOUND = "Product not found"
ERROR_INSUFFICIENT_STOCK = "Insufficient stock for product"

# Internal errors
ERROR_CORRUPT_ENTRY = "Stored cart entry could not be decoded"
ERROR_STORE_UNAVAILABLE = "Cart store unavailable"
ERROR_CATALOG_UNAVAILABLE = "Product catalog unavailable"
ERROR_INTERNAL = "Internal server error"
ERROR_UNAUTHORIZED = "Unauthorized"


class CartError(Exception):
    """Base class for every classified cart failure."""

    status_code = 500
    is_internal = True
    default_message = ERROR_INTERNAL

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidQuantityError(CartError):
    status_code = 400
    is_internal = False
    default_message = ERROR_INVALID_QUANTITY


class InvalidSKUError(CartError):
    status_code = 400
    is_internal = False
    default_message = ERROR_INVALID_SKU


class ItemNotFoundError(CartError):
    status_code = 404
    is_internal = False
    default_message = ERROR_ITEM_NOT_FOUND


class ProductNotFoundError(CartError):
    status_code = 404
    is_internal = False
    default_message = ERROR_PRODUCT_NOT_FOUND


class InsufficientStockError(CartError):
    status_code = 409
    is_internal = False
    default_message = ERROR_INSUFFICIENT_STOCK


class CorruptEntryError(CartError):
    default_message = ERROR_CORRUPT_ENTRY


class StoreUnavailableError(CartError):
    default_message = ERROR_STORE_UNAVAILABLE


class CatalogUnavailableError(CartError):
    """Unclassified catalog failure (transport error, unexpected status, bad body)."""

    default_message = ERROR_CATALOG_UNAVAILABLE


__all__ = [
    "ERROR_INVALID_QUANTITY",
    "ERROR_INVALID_SKU",
    "ERROR_ITEM_NOT_FOUND",
    "ERROR_PRODUCT_NOT_FOUND",
    "ERROR_INSUFFICIENT_STOCK",
    "ERROR_CORRUPT_ENTRY",
    "ERROR_STORE_UNAVAILABLE",
    "ERROR_CATALOG_UNAVAILABLE",
    "ERROR_INTERNAL",
    "ERROR_UNAUTHORIZED",
    "CartError",
    "InvalidQuantityError",
    "InvalidSKUError",
    "ItemNotFoundError",
    "ProductNotFoundError",
    "InsufficientStockError",
    "CorruptEntryError",
    "StoreUnavailableError",
    "CatalogUnavailableError",
]
