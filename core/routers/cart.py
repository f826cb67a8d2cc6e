"""
Cart Router

Shopping cart endpoints. Maps cart error kinds to HTTP status classes:
- invalid quantity / SKU -> 400
- item or product not found -> 404
- insufficient stock -> 409
- store, corrupt entry, catalog failures -> 500 with a generic message
"""
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException

from core.auth import CartUser, verify_cart_user
from core.cart import CartManager
from core.errors import ERROR_INTERNAL, CartError
from core.logging import get_logger
from .deps import get_cart_manager
from .models import AddCartItemRequest, UpdateCartItemRequest

logger = get_logger(__name__)

router = APIRouter(prefix="/api/cart", tags=["cart"])


def _raise_http(error: CartError, action: str) -> NoReturn:
    """Translate a cart error; internal failures never leak their text."""
    if error.is_internal:
        logger.error(f"Failed to {action}: {error}", exc_info=error)
        raise HTTPException(status_code=500, detail=ERROR_INTERNAL) from error
    raise HTTPException(status_code=error.status_code, detail=error.message) from error


@router.get("")
async def get_cart(
    user: CartUser = Depends(verify_cart_user),
    cart_manager: CartManager = Depends(get_cart_manager),
):
    """Get the caller's cart with totals."""
    try:
        cart = await cart_manager.get_cart(user.id)
    except CartError as e:
        _raise_http(e, "get cart")
    return cart.to_dict()


@router.post("/items")
async def add_item(
    request: AddCartItemRequest,
    user: CartUser = Depends(verify_cart_user),
    cart_manager: CartManager = Depends(get_cart_manager),
):
    """Put an item in the cart (replaces the quantity if the SKU is already there)."""
    try:
        item = await cart_manager.add_item(user.id, request.sku, request.quantity)
    except CartError as e:
        _raise_http(e, "add item to cart")
    return {"item": item.to_dict()}


@router.patch("/items/{sku:path}")
async def update_item(
    sku: str,
    request: UpdateCartItemRequest,
    user: CartUser = Depends(verify_cart_user),
    cart_manager: CartManager = Depends(get_cart_manager),
):
    """Change the quantity of an item already in the cart."""
    try:
        item = await cart_manager.update_item_quantity(user.id, sku, request.quantity)
    except CartError as e:
        _raise_http(e, "update cart item")
    return {"item": item.to_dict()}


@router.delete("/items/{sku:path}")
async def remove_item(
    sku: str,
    user: CartUser = Depends(verify_cart_user),
    cart_manager: CartManager = Depends(get_cart_manager),
):
    """Remove an item from the cart."""
    try:
        await cart_manager.remove_item(user.id, sku)
    except CartError as e:
        _raise_http(e, "remove cart item")
    return {"status": "ok"}


@router.delete("")
async def clear_cart(
    user: CartUser = Depends(verify_cart_user),
    cart_manager: CartManager = Depends(get_cart_manager),
):
    """Empty the cart."""
    try:
        await cart_manager.clear_cart(user.id)
    except CartError as e:
        _raise_http(e, "clear cart")
    return {"status": "ok"}
