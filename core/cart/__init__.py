"""Cart package: models, storage, and manager."""
from .models import CartEntry, CartView
from .service import CartManager
from .storage import CartStore

__all__ = [
    "CartEntry",
    "CartView",
    "CartManager",
    "CartStore",
]
