"""Order lifecycle: legal status and payment-status transitions.

This module is the single source of truth for which admin edits an order
accepts. Callers ask ``next_statuses``/``next_payment_statuses`` for the
options to offer, and apply a choice with ``transition_status`` or
``transition_payment``. Both functions return a new ``Order`` with a fresh
``updated_at`` and leave the input untouched; persisting the result (inside
the store's atomic update) is the caller's job.
"""

from datetime import UTC, datetime

import structlog

from ordering.order.order import Order, OrderStatus, PaymentStatus
from shared.exceptions import IllegalTransition, InvalidTimestamp, PaymentNotSettled

logger = structlog.get_logger(__name__)

# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

_VALID_PAYMENT_TRANSITIONS = {
    PaymentStatus.PENDING: {PaymentStatus.PAID, PaymentStatus.FAILED},
    PaymentStatus.PAID: set(),  # Terminal
    PaymentStatus.FAILED: set(),  # Terminal
}


def is_terminal(status: OrderStatus | PaymentStatus) -> bool:
    if isinstance(status, PaymentStatus):
        return not _VALID_PAYMENT_TRANSITIONS[status]
    return not _VALID_TRANSITIONS[status]


def _stamp(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(UTC)
    if now.tzinfo is None:
        raise InvalidTimestamp({"updated_at": ["Order timestamps must carry a timezone"]})
    return now


def _blocks_delivery(order: Order, target: OrderStatus) -> bool:
    return target == OrderStatus.DELIVERED and order.payment_status == PaymentStatus.FAILED


def next_statuses(order: Order) -> list[OrderStatus]:
    """Statuses the order can move to right now, in lifecycle order."""
    allowed = _VALID_TRANSITIONS[order.status]
    return [status for status in OrderStatus if status in allowed and not _blocks_delivery(order, status)]


def next_payment_statuses(order: Order) -> list[PaymentStatus]:
    allowed = _VALID_PAYMENT_TRANSITIONS[order.payment_status]
    return [status for status in PaymentStatus if status in allowed]


def transition_status(order: Order, new_status: OrderStatus, *, now: datetime | None = None) -> Order:
    """Move the order to ``new_status``.

    Raises ``IllegalTransition`` when the edge is not in the adjacency table
    and ``PaymentNotSettled`` when delivering an order whose payment failed.
    A ``now`` without a timezone raises ``InvalidTimestamp``.
    Cancellation does not depend on payment status.
    """
    new_status = OrderStatus(new_status)
    current = order.status

    if new_status not in _VALID_TRANSITIONS[current]:
        raise IllegalTransition({"status": [f"Cannot transition from {current.value} to {new_status.value}"]})
    if _blocks_delivery(order, new_status):
        raise PaymentNotSettled({"payment_status": ["Cannot mark delivered: payment not settled"]})

    updated = order.model_copy(update={"status": new_status, "updated_at": _stamp(now)})
    logger.debug("Order status transitioned", order_id=order.id, previous=current.value, status=new_status.value)
    return updated


def transition_payment(order: Order, new_payment_status: PaymentStatus, *, now: datetime | None = None) -> Order:
    """Settle the order's payment; only ``pending → paid|failed`` is legal."""
    new_payment_status = PaymentStatus(new_payment_status)
    current = order.payment_status

    if new_payment_status not in _VALID_PAYMENT_TRANSITIONS[current]:
        raise IllegalTransition(
            {"payment_status": [f"Cannot transition payment from {current.value} to {new_payment_status.value}"]}
        )

    updated = order.model_copy(update={"payment_status": new_payment_status, "updated_at": _stamp(now)})
    logger.debug(
        "Order payment transitioned",
        order_id=order.id,
        previous=current.value,
        payment_status=new_payment_status.value,
    )
    return updated
