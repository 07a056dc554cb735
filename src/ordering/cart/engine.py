"""Cart engine: the single entry point for cart state transitions.

``apply(cart, action)`` is pure: it never mutates ``cart`` and returns the
next cart. Actions form a discriminated union on ``type`` so they can be
received as JSON (``{"type": "ADD_ITEM", "line": {...}}``).
"""

from functools import singledispatch
from typing import Annotated

from pydantic import Field, TypeAdapter

from ordering.cart.cart import Cart
from ordering.cart.items import (
    AddItem,
    RemoveItem,
    UpdateQuantity,
    add_item,
    remove_item,
    update_quantity,
)
from ordering.cart.management import ClearCart, SetCart, clear_cart, set_cart

CartAction = Annotated[
    AddItem | UpdateQuantity | RemoveItem | ClearCart | SetCart,
    Field(discriminator="type"),
]

cart_action_adapter = TypeAdapter(CartAction)


@singledispatch
def _transition(action, cart: Cart) -> Cart:
    raise TypeError(f"Unsupported cart action: {type(action).__name__}")


_transition.register(AddItem, lambda action, cart: add_item(cart, action))
_transition.register(UpdateQuantity, lambda action, cart: update_quantity(cart, action))
_transition.register(RemoveItem, lambda action, cart: remove_item(cart, action))
_transition.register(ClearCart, lambda action, cart: clear_cart(cart, action))
_transition.register(SetCart, lambda action, cart: set_cart(cart, action))


def apply(cart: Cart, action) -> Cart:
    """Return the cart that results from applying ``action`` to ``cart``.

    ``action`` may be an action model or its JSON-compatible dict form.
    """
    if isinstance(action, dict):
        action = cart_action_adapter.validate_python(action)
    return _transition(action, cart)


def apply_all(cart: Cart, actions) -> Cart:
    for action in actions:
        cart = apply(cart, action)
    return cart
