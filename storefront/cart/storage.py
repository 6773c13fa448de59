"""Cart persistence on top of a PersistenceSlot."""
from typing import Optional

from storefront.db import PersistenceSlot, RedisKeys
from storefront.logging import get_logger
from .models import Cart

logger = get_logger(__name__)


class CartStorage:
    """Reads and rewrites the whole cart under one key."""

    def __init__(self, slot: PersistenceSlot, key: Optional[str] = None):
        self.slot = slot
        self.key = key or RedisKeys.cart_key()

    async def load(self) -> Cart:
        """Load the stored cart; empty when nothing (usable) is stored."""
        raw = await self.slot.get(self.key)
        if not raw:
            return Cart()

        try:
            return Cart.loads(raw)
        except (ValueError, TypeError) as e:
            # Corrupted data - clear it and start over
            logger.warning(f"Corrupted cart data under {self.key}: {e}")
            await self.slot.delete(self.key)
            return Cart()

    async def save(self, cart: Cart) -> None:
        """Overwrite the slot with the full cart."""
        await self.slot.set(self.key, cart.dumps())

    async def clear(self) -> None:
        await self.slot.delete(self.key)
