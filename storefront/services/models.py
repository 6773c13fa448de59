"""Wire models for the catalog and stock service."""
from decimal import Decimal
from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator

from storefront.services.money import to_decimal


class Stock(BaseModel):
    """Stock record: units available for a product."""
    id: int
    amount: int

    model_config = ConfigDict(extra="ignore")


class Product(BaseModel):
    """Catalog entry for a product (no quantity)."""
    id: int
    name: str = Field(default="", validation_alias=AliasChoices("name", "title"))
    price: Decimal
    image: Optional[str] = None

    # Keep whatever else the catalog sends; line items are a denormalized copy
    model_config = ConfigDict(extra="allow", frozen=True)

    @field_validator("price", mode="before")
    @classmethod
    def float_to_decimal(cls, v):
        # Floats go through str; anything unparseable is left for pydantic to reject
        if isinstance(v, float):
            return to_decimal(v)
        return v

    @field_serializer("price", when_used="json")
    def price_as_number(self, price: Decimal) -> Union[int, float]:
        """Stored and sent as a JSON number, as the catalog does."""
        if price == price.to_integral_value():
            return int(price)
        return float(price)
