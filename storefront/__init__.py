"""
Storefront Cart Module

This package contains the client-side cart infrastructure:
- config: Environment-driven settings
- db: Persistence slot (Upstash Redis or in-process memory)
- services: Catalog/stock API client and notification sinks
- cart: Cart models, storage and the cart store
- i18n: User-facing messages

Note: Imports are lazy so that importing the package does not
configure clients or read the persistence slot.
"""

__all__ = [
    "CartStore",
    "create_cart_store",
    "get_redis",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "CartStore":
        from storefront.cart import CartStore
        return CartStore
    elif name == "create_cart_store":
        from storefront.cart import create_cart_store
        return create_cart_store
    elif name == "get_redis":
        from storefront.db import get_redis
        return get_redis
    raise AttributeError(f"module 'storefront' has no attribute '{name}'")
