"""Checkout — turn a cart into a persisted order and confirm it to the customer.

Flow:
    1. Price the cart and snapshot it into a pending Order
    2. Persist the Order through the store (the order is placed once this succeeds)
    3. Send the confirmation email
    4. Hand back an empty cart

A failed or crashing confirmation send never undoes step 2. It is logged and
returned to the caller as a warning next to the placed order. A store failure
in step 2 propagates: nothing was placed and the cart is left as it was.
"""

from dataclasses import dataclass, field
from datetime import datetime

import structlog

from notifications.channel.email_port import OrderConfirmationPort
from ordering.cart.cart import Cart
from ordering.order.creation import place_order
from ordering.order.order import Order, ShippingAddress
from ordering.pricing.policy import PricingPolicy
from ordering.store.port import OrderStore

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CheckoutResult:
    order: Order
    cart: Cart
    warnings: list[str] = field(default_factory=list)

    @property
    def order_id(self) -> str:
        return self.order.id


def checkout(
    cart: Cart,
    policy: PricingPolicy,
    customer,
    shipping_address: ShippingAddress,
    payment_method: str,
    store: OrderStore,
    notifier: OrderConfirmationPort,
    notes: str | None = None,
    now: datetime | None = None,
) -> CheckoutResult:
    order = place_order(
        cart,
        policy,
        customer=customer,
        shipping_address=shipping_address,
        payment_method=payment_method,
        notes=notes,
        now=now,
    )

    order_id = store.create_order(order)
    logger.info(
        "Order placed",
        order_id=order_id,
        user_id=customer.user_id,
        total=order.pricing.total,
        item_count=order.item_count,
    )

    warnings = []
    try:
        result = notifier.send_order_confirmation(customer.email, order)
    except Exception as exc:
        logger.warning("Order confirmation email raised", order_id=order_id, error=str(exc))
        warnings.append(f"Order placed, but the confirmation email could not be sent: {exc}")
    else:
        if not result.success:
            logger.warning("Order confirmation email failed", order_id=order_id, reason=result.message)
            warnings.append(f"Order placed, but the confirmation email could not be sent: {result.message}")

    return CheckoutResult(order=order, cart=Cart.empty(), warnings=warnings)
