"""Authentication package."""
from .identity import CartUser, verify_cart_user

__all__ = [
    "CartUser",
    "verify_cart_user",
]
