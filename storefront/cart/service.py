"""
Cart store: the single in-memory cart shared by all UI consumers.

Operations suspend on the catalog/stock service and then commit a new
cart computed from the snapshot taken when they started. Nothing is
locked or queued, so when two operations overlap the last commit wins.
"""
import asyncio
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional

from pydantic import ValidationError

from storefront import config
from storefront.db import MemorySlot, RedisSlot
from storefront.errors import CartErrorKind
from storefront.i18n import get_text
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.api import StorefrontApi
from storefront.services.notifications import LogNotifier, NotificationSink
from .models import AmountUpdate, Cart, CartItem
from .storage import CartStorage

logger = get_logger(__name__)

CartListener = Callable[[Cart], None]


@dataclass(frozen=True)
class CartResult:
    """Outcome of a cart operation."""
    cart: Cart
    error: Optional[CartErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CartStore:
    """
    Holds the current cart and exposes the operations the UI calls.

    Features:
    - Stock check before adding (and before increasing a quantity)
    - Full rewrite of the persistence slot on every commit
    - Subscribers notified with the new cart after each commit
    - Failures reported once through the notification sink, never raised
    """

    def __init__(
        self,
        api: StorefrontApi,
        storage: CartStorage,
        notifier: NotificationSink,
        language: Optional[str] = None,
    ):
        self.api = api
        self.storage = storage
        self.notifier = notifier
        self.language = language or config.STOREFRONT_LANGUAGE
        self._cart = Cart()
        self._loaded = False
        self._load_task: Optional[asyncio.Future] = None
        self._listeners: List[CartListener] = []

    @property
    def cart(self) -> Cart:
        """Current cart snapshot."""
        return self._cart

    async def load(self) -> Cart:
        """
        Read the persisted cart on first access.

        Operations started while the read is in flight all wait on the
        same read, so a late result never overwrites a committed cart.
        """
        if not self._loaded:
            if self._load_task is None:
                self._load_task = asyncio.ensure_future(self._read_persisted())
            try:
                await self._load_task
            except Exception:
                self._load_task = None
                raise
        return self._cart

    async def _read_persisted(self) -> None:
        cart = await self.storage.load()
        if not self._loaded:
            self._cart = cart
            self._loaded = True
            logger.debug(f"Cart loaded with {cart.size} items")

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Register a listener for committed carts; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _commit(self, cart: Cart) -> None:
        self._cart = cart
        for listener in list(self._listeners):
            try:
                listener(cart)
            except Exception:
                logger.exception("Cart listener failed")
        try:
            await self.storage.save(cart)
        except Exception as e:
            # In-memory state stays authoritative; next commit rewrites the slot
            logger.error(f"Failed to persist cart: {e}")

    def _reject(self, kind: CartErrorKind) -> CartResult:
        self.notifier.error(get_text(kind.message_key, self.language))
        return CartResult(cart=self._cart, error=kind)

    async def get_product_stock(self, product_id: int) -> int:
        """Live available amount for a product. Lookup failures propagate."""
        stock = await self.api.get_stock(product_id)
        return stock.amount

    async def add_product(self, product_id: int) -> CartResult:
        """Add one unit of a product, fetching its metadata if it is new."""
        safe_id = sanitize_id_for_logging(product_id)
        try:
            await self.load()
            snapshot = self._cart

            product_stock = await self.get_product_stock(product_id)
            if product_stock <= 0:
                logger.warning(f"Product {safe_id} is out of stock")
                return self._reject(CartErrorKind.OUT_OF_STOCK)

            # Only a non-empty stock is required; current amount is not compared
            if snapshot.find(product_id) is None:
                product = await self.api.get_product(product_id)
                new_cart = snapshot.append(CartItem.from_product(product, amount=1))
            else:
                new_cart = snapshot.replace_amount(product_id, lambda amount: amount + 1)
        except Exception:
            logger.exception(f"Failed to add product {safe_id}")
            return self._reject(CartErrorKind.ADD_FAILED)

        await self._commit(new_cart)
        logger.debug(f"Product {safe_id} added to cart")
        return CartResult(cart=new_cart)

    async def remove_product(self, product_id: int) -> CartResult:
        """Drop a product from the cart; absent ids leave the cart as is."""
        try:
            await self.load()
            new_cart = self._cart.without(product_id)
        except Exception:
            logger.exception(f"Failed to remove product {sanitize_id_for_logging(product_id)}")
            return self._reject(CartErrorKind.REMOVE_FAILED)

        await self._commit(new_cart)
        return CartResult(cart=new_cart)

    async def update_product_amount(self, product_id: int, amount: int) -> CartResult:
        """
        Change a product's amount by ``amount`` (a delta, not a target).

        Increases require stock; decreases never look stock up and are not
        floored, so an item can reach zero or below.
        """
        safe_id = sanitize_id_for_logging(product_id)
        try:
            await self.load()
            snapshot = self._cart

            if amount > 0:
                product_stock = await self.get_product_stock(product_id)
                if product_stock <= 0:
                    logger.warning(f"Product {safe_id} is out of stock")
                    return self._reject(CartErrorKind.OUT_OF_STOCK)

            new_cart = snapshot.replace_amount(product_id, lambda current: current + amount)
        except Exception:
            logger.exception(f"Failed to update amount of product {safe_id}")
            return self._reject(CartErrorKind.UPDATE_FAILED)

        await self._commit(new_cart)
        return CartResult(cart=new_cart)

    async def update_product_amount_from(self, payload: Mapping[str, Any]) -> CartResult:
        """Same as update_product_amount, taking a ``{"productId", "amount"}`` payload."""
        try:
            update = AmountUpdate.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Invalid amount update payload: {e.error_count()} errors")
            return self._reject(CartErrorKind.UPDATE_FAILED)
        return await self.update_product_amount(update.product_id, update.amount)

    async def clear(self) -> CartResult:
        """Empty the cart."""
        self._loaded = True
        new_cart = Cart()
        await self._commit(new_cart)
        return CartResult(cart=new_cart)


async def create_cart_store(
    api: Optional[StorefrontApi] = None,
    storage: Optional[CartStorage] = None,
    notifier: Optional[NotificationSink] = None,
    language: Optional[str] = None,
) -> CartStore:
    """
    Build a loaded CartStore with default collaborators.

    Redis is used for persistence when Upstash credentials are configured,
    otherwise the cart only lives as long as the process.
    """
    if storage is None:
        if config.UPSTASH_REDIS_REST_URL and config.UPSTASH_REDIS_REST_TOKEN:
            storage = CartStorage(RedisSlot())
        else:
            logger.warning("Upstash Redis not configured, cart will not survive restarts")
            storage = CartStorage(MemorySlot())

    store = CartStore(
        api=api or StorefrontApi(),
        storage=storage,
        notifier=notifier or LogNotifier(),
        language=language,
    )
    await store.load()
    return store
