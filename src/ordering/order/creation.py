"""Order creation — price a cart and snapshot it into a pending order."""

from datetime import datetime

import structlog

from ordering.cart.cart import Cart
from ordering.order.order import Order, ShippingAddress
from ordering.pricing.engine import price
from ordering.pricing.policy import PricingPolicy
from shared.exceptions import EmptyCart

logger = structlog.get_logger(__name__)


def place_order(
    cart: Cart,
    policy: PricingPolicy,
    customer,
    shipping_address: ShippingAddress,
    payment_method: str,
    notes: str | None = None,
    now: datetime | None = None,
) -> Order:
    """Build the immutable Order for ``cart``; nothing is persisted here."""
    if cart.is_empty:
        raise EmptyCart({"cart": ["Cannot place an order for an empty cart"]})

    order = Order.create(
        customer=customer,
        cart=cart,
        pricing=price(cart, policy),
        shipping_address=shipping_address,
        payment_method=payment_method,
        currency=policy.currency,
        notes=notes,
        now=now,
    )
    logger.debug("Order snapshot created", order_id=order.id, total=order.pricing.total)
    return order
