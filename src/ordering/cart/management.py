"""Whole-cart actions: clear, restore, and guest-cart merging at sign-in."""

from typing import Literal

import structlog
from pydantic import BaseModel, ConfigDict

from ordering.cart.cart import Cart, CartLine, merge_line

logger = structlog.get_logger(__name__)


class ClearCart(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["CLEAR_CART"] = "CLEAR_CART"


class SetCart(BaseModel):
    """Replace the cart wholesale, e.g. when restoring it from storage."""

    model_config = ConfigDict(frozen=True)

    type: Literal["SET_CART"] = "SET_CART"
    lines: tuple[CartLine, ...] = ()


def clear_cart(cart: Cart, action: ClearCart) -> Cart:  # noqa: ARG001
    return Cart.empty()


def set_cart(cart: Cart, action: SetCart) -> Cart:  # noqa: ARG001
    return Cart.from_lines(action.lines)


def merge_carts(saved: Cart, guest: Cart) -> Cart:
    """Merge a guest session's cart into a customer's saved cart.

    Guest lines are folded in with the same rule as adding an item: matching
    variants grow in quantity and keep the saved cart's price.
    """
    lines = saved.lines
    for line in guest.lines:
        lines = merge_line(lines, line)

    merged = Cart(lines=lines)
    logger.debug(
        "Guest cart merged",
        saved_lines=len(saved.lines),
        guest_lines=len(guest.lines),
        merged_lines=len(merged.lines),
    )
    return merged
