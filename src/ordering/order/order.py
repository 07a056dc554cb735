"""Order snapshot created at checkout.

An Order freezes the cart lines and the price breakdown at the moment of
checkout. Afterwards only ``status``, ``payment_status`` and ``updated_at``
change, and only through ``ordering.order.lifecycle``.

Status state machine:
    PENDING → PROCESSING → SHIPPED → DELIVERED
    PENDING / PROCESSING / SHIPPED → CANCELLED
Payment status:
    PENDING → PAID | FAILED
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ordering.cart.cart import Cart, CartLine
from ordering.pricing.policy import PriceBreakdown


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
class ShippingAddress(BaseModel):
    """Delivery address captured at checkout.

    Once recorded on an Order the address is immutable, regardless of later
    changes to the customer's saved address.
    """

    model_config = ConfigDict(frozen=True)

    full_name: str | None = None
    street: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    postal_code: str = Field(min_length=1, max_length=20)
    country: str = Field(min_length=1, max_length=100)
    phone: str = Field(min_length=1, max_length=30)
    email: str | None = None


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------
class Order(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex, min_length=1)
    user_id: str = Field(min_length=1)
    user_email: str
    user_name: str = ""
    items: tuple[CartLine, ...] = Field(min_length=1)
    pricing: PriceBreakdown
    currency: str = "PKR"
    shipping_address: ShippingAddress
    payment_method: str = Field(min_length=1, max_length=50)
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    notes: str | None = Field(default=None, max_length=1000)
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def _timestamps_must_be_aware(cls, value):
        if value.tzinfo is None:
            raise ValueError("Order timestamps must carry a timezone")
        return value

    @model_validator(mode="after")
    def _pricing_must_match_items(self):
        items_subtotal = sum(item.line_total for item in self.items)
        if items_subtotal != self.pricing.subtotal:
            raise ValueError(f"Pricing subtotal {self.pricing.subtotal} does not match items subtotal {items_subtotal}")
        return self

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        customer,
        cart: Cart,
        pricing: PriceBreakdown,
        shipping_address: ShippingAddress,
        payment_method: str,
        currency: str = "PKR",
        notes: str | None = None,
        now: datetime | None = None,
    ) -> "Order":
        """Snapshot ``cart`` and its ``pricing`` into a new pending order."""
        now = now or datetime.now(UTC)
        return cls(
            user_id=customer.user_id,
            user_email=customer.email,
            user_name=customer.display_name,
            items=cart.lines,
            pricing=pricing,
            currency=currency,
            shipping_address=shipping_address,
            payment_method=payment_method,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Convenience accessors
    # -------------------------------------------------------------------
    @property
    def total(self) -> int:
        return self.pricing.total

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)
