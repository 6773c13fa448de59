"""Cart models: immutable line items and carts."""
import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from storefront.services.models import Product
from storefront.services.money import round_money


class CartItem(Product):
    """Single product in the cart with its quantity."""
    amount: int

    @property
    def subtotal(self) -> Decimal:
        """Price for all units."""
        return round_money(self.price * self.amount)

    def with_amount(self, amount: int) -> "CartItem":
        """Copy of this item with a different amount."""
        return self.model_copy(update={"amount": amount})

    @classmethod
    def from_product(cls, product: Product, amount: int = 1) -> "CartItem":
        """Build a line item from catalog metadata."""
        return cls.model_validate({**product.model_dump(), "amount": amount})

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary."""
        return self.model_dump(mode="json")


@dataclass(frozen=True)
class Cart:
    """
    Ordered line items, at most one per product id.

    Carts are values: every helper returns a new Cart and never touches
    the items of the original.
    """
    items: Tuple[CartItem, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))
        ids = [item.id for item in self.items]
        if len(ids) != len(set(ids)):
            raise ValueError("Cart contains duplicate product ids")

    def __iter__(self) -> Iterator[CartItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def size(self) -> int:
        """Number of distinct products."""
        return len(self.items)

    @property
    def total_items(self) -> int:
        """Total number of units in the cart."""
        return sum(item.amount for item in self.items)

    @property
    def total(self) -> Decimal:
        return round_money(sum((item.subtotal for item in self.items), Decimal("0")))

    def find(self, product_id: int) -> Optional[CartItem]:
        return next((item for item in self.items if item.id == product_id), None)

    def append(self, item: CartItem) -> "Cart":
        return Cart(self.items + (item,))

    def replace_amount(self, product_id: int, fn: Callable[[int], int]) -> "Cart":
        """New cart with ``fn`` applied to the matching item's amount."""
        return Cart(tuple(
            item.with_amount(fn(item.amount)) if item.id == product_id else item
            for item in self.items
        ))

    def without(self, product_id: int) -> "Cart":
        return Cart(tuple(item for item in self.items if item.id != product_id))

    def to_list(self) -> list:
        return [item.to_dict() for item in self.items]

    def dumps(self) -> str:
        """Serialize as a JSON array of line items."""
        return json.dumps(self.to_list(), ensure_ascii=False)

    @classmethod
    def loads(cls, raw: str) -> "Cart":
        """
        Parse a serialized cart.

        Raises:
            ValueError: raw is not a JSON array of valid line items
        """
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of cart items, got {type(data).__name__}")
        return cls(tuple(CartItem.model_validate(entry) for entry in data))


class AmountUpdate(BaseModel):
    """Quantity change sent by the UI: ``amount`` is added to the current amount."""
    product_id: int = Field(alias="productId")
    amount: int

    model_config = ConfigDict(populate_by_name=True)
