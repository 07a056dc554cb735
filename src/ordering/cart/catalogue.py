"""Snapshot catalogue products into cart lines at add-to-cart time.

The unit price, name, image and category are copied from the product when the
line is created. Later catalogue price changes do not reach lines already in
a cart, and pricing never reads the catalogue again.
"""

import structlog

from catalogue.product.port import CataloguePort
from catalogue.product.product import Product
from ordering.cart.cart import Cart, CartLine
from ordering.cart.items import AddItem
from shared.exceptions import InsufficientStock, InvalidQuantity, InvalidSelection

logger = structlog.get_logger(__name__)


def _check_option(field, value, offered):
    if offered and value not in offered:
        raise InvalidSelection({field: [f"Select a {field}: one of {', '.join(offered)}"]})
    if not offered and value:
        raise InvalidSelection({field: [f"This product has no {field} options"]})


def line_from_product(
    product: Product, size: str = "", color: str = "", quantity: int = 1, in_cart: int = 0
) -> CartLine:
    """Build a cart line for ``product`` in the selected size and color.

    ``in_cart`` is how many units of the product the cart already holds, in
    any size or color; stock is checked against that plus ``quantity``.
    """
    if quantity < 1:
        raise InvalidQuantity({"quantity": [f"Cannot add {quantity} of {product.id}"]})
    if not product.is_published:
        raise InvalidSelection({"product_id": [f"{product.name} is not available for sale"]})

    _check_option("size", size, product.sizes)
    _check_option("color", color, product.colors)

    if in_cart + quantity > product.stock:
        raise InsufficientStock(
            {
                "quantity": [
                    f"Only {product.stock} of {product.name} left in stock, "
                    f"requested {quantity} with {in_cart} already in cart"
                ]
            }
        )

    return CartLine(
        product_id=product.id,
        size=size,
        color=color,
        unit_price=product.price,
        quantity=quantity,
        name=product.name,
        image=product.primary_image,
        category=product.category,
    )


def add_to_cart_action(
    catalogue: CataloguePort, product_id: str, size="", color="", quantity=1, cart: Cart | None = None
) -> AddItem:
    """Look up ``product_id`` and return the ``AddItem`` action for it.

    Pass the ``cart`` the action will be applied to so units already in it
    count against stock.
    """
    product = catalogue.get_product(product_id)
    in_cart = sum(line.quantity for line in cart.lines if line.product_id == product.id) if cart is not None else 0
    line = line_from_product(product, size=size, color=color, quantity=quantity, in_cart=in_cart)
    logger.debug(
        "Catalogue price captured for cart line",
        product_id=product.id,
        unit_price=line.unit_price,
    )
    return AddItem(line=line)
