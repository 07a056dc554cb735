"""Persisted shape of an Order.

Orders are stored as flat records so any document or row store can hold
them: money in integer minor units, timestamps as ISO-8601 strings with an
explicit offset, enums as their string values, line items as a list of dicts.
"""

from datetime import datetime

from ordering.cart.cart import CartLine
from ordering.order.order import Order, OrderStatus, PaymentStatus, ShippingAddress
from ordering.pricing.policy import PriceBreakdown

# Payment status values written by earlier storefront versions
_LEGACY_PAYMENT_STATUSES = {"completed": PaymentStatus.PAID}


def to_record(order: Order) -> dict:
    return {
        "id": order.id,
        "user_id": order.user_id,
        "user_email": order.user_email,
        "user_name": order.user_name,
        "items": [item.model_dump() for item in order.items],
        "subtotal": order.pricing.subtotal,
        "shipping_cost": order.pricing.shipping_cost,
        "tax_amount": order.pricing.tax_amount,
        "total_amount": order.pricing.total,
        "currency": order.currency,
        "shipping_address": order.shipping_address.model_dump(),
        "payment_method": order.payment_method,
        "status": order.status.value,
        "payment_status": order.payment_status.value,
        "notes": order.notes,
        "created_at": order.created_at.isoformat(),
        "updated_at": order.updated_at.isoformat(),
    }


def _parse_timestamp(value) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def from_record(record: dict) -> Order:
    payment_status = record.get("payment_status", PaymentStatus.PENDING.value)
    payment_status = _LEGACY_PAYMENT_STATUSES.get(payment_status, payment_status)

    return Order(
        id=record["id"],
        user_id=record["user_id"],
        user_email=record["user_email"],
        user_name=record.get("user_name") or "",
        items=tuple(CartLine(**item) for item in record["items"]),
        pricing=PriceBreakdown(
            subtotal=record["subtotal"],
            shipping_cost=record["shipping_cost"],
            tax_amount=record["tax_amount"],
            total=record["total_amount"],
        ),
        currency=record.get("currency") or "PKR",
        shipping_address=ShippingAddress(**record["shipping_address"]),
        payment_method=record["payment_method"],
        status=OrderStatus(record.get("status", OrderStatus.PENDING.value)),
        payment_status=PaymentStatus(payment_status),
        notes=record.get("notes"),
        created_at=_parse_timestamp(record["created_at"]),
        updated_at=_parse_timestamp(record["updated_at"]),
    )
