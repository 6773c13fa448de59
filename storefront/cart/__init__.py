"""Cart package: models, storage, and the cart store."""
from .models import AmountUpdate, CartItem, Cart
from .service import CartResult, CartStore, create_cart_store
from .storage import CartStorage

__all__ = [
    "AmountUpdate",
    "CartItem",
    "Cart",
    "CartResult",
    "CartStore",
    "CartStorage",
    "create_cart_store",
]
