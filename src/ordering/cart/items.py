"""Cart item actions: add, change quantity, remove."""

from typing import Literal

import structlog
from pydantic import BaseModel, ConfigDict, field_validator

from ordering.cart.cart import Cart, CartLine, VariantKey, merge_line
from shared.exceptions import InvalidQuantity

logger = structlog.get_logger(__name__)


class AddItem(BaseModel):
    """Add a line, or grow the quantity of the line with the same variant key.

    When the variant is already in the cart, the incoming ``unit_price`` is
    ignored: the price captured on the first add is kept. Re-pricing an
    existing line requires removing it and adding it again.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["ADD_ITEM"] = "ADD_ITEM"
    line: CartLine

    @field_validator("line")
    @classmethod
    def _quantity_must_be_positive(cls, line):
        if line.quantity < 1:
            raise InvalidQuantity({"quantity": [f"Cannot add {line.quantity} of {line.variant_key}"]})
        return line


class UpdateQuantity(BaseModel):
    """Set a line's quantity; anything below 1 removes the line."""

    model_config = ConfigDict(frozen=True)

    type: Literal["UPDATE_QUANTITY"] = "UPDATE_QUANTITY"
    variant_key: VariantKey
    quantity: int


class RemoveItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["REMOVE_ITEM"] = "REMOVE_ITEM"
    variant_key: VariantKey


def add_item(cart: Cart, action: AddItem) -> Cart:
    if action.line.quantity < 1:
        raise InvalidQuantity({"quantity": [f"Cannot add {action.line.quantity} of {action.line.variant_key}"]})
    return Cart(lines=merge_line(cart.lines, action.line))


def update_quantity(cart: Cart, action: UpdateQuantity) -> Cart:
    if action.quantity < 1:
        return remove_item(cart, RemoveItem(variant_key=action.variant_key))

    if cart.find(action.variant_key) is None:
        logger.debug("Quantity update for variant not in cart", variant_key=str(action.variant_key))
        return cart

    return Cart(
        lines=tuple(
            line.with_quantity(action.quantity) if line.variant_key == action.variant_key else line
            for line in cart.lines
        )
    )


def remove_item(cart: Cart, action: RemoveItem) -> Cart:
    return Cart(lines=tuple(line for line in cart.lines if line.variant_key != action.variant_key))
