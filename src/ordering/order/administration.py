"""Admin order edits — apply lifecycle transitions inside the store's atomic update.

The acting admin is attributed in the log; the core does not check whether
the principal is allowed to act, that is the auth collaborator's concern.
"""

from datetime import datetime

import structlog

from ordering.order.lifecycle import transition_payment, transition_status
from ordering.order.order import Order, OrderStatus, PaymentStatus
from ordering.store.port import OrderStore

logger = structlog.get_logger(__name__)


def change_order_status(
    store: OrderStore,
    order_id: str,
    new_status: OrderStatus,
    actor=None,
    now: datetime | None = None,
) -> Order:
    new_status = OrderStatus(new_status)
    order = store.update_order(order_id, lambda current: transition_status(current, new_status, now=now))
    logger.info(
        "Order status updated",
        order_id=order_id,
        status=new_status.value,
        actor_id=actor.user_id if actor else None,
    )
    return order


def change_payment_status(
    store: OrderStore,
    order_id: str,
    new_payment_status: PaymentStatus,
    actor=None,
    now: datetime | None = None,
) -> Order:
    new_payment_status = PaymentStatus(new_payment_status)
    order = store.update_order(order_id, lambda current: transition_payment(current, new_payment_status, now=now))
    logger.info(
        "Order payment status updated",
        order_id=order_id,
        payment_status=new_payment_status.value,
        actor_id=actor.user_id if actor else None,
    )
    return order
