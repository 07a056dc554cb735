"""Pydantic request/response schemas for the Ordering API.

Carts are owned by the client: every cart request carries the current cart
and every response returns the next one. Money is integer minor units.
"""

from pydantic import BaseModel, Field

from ordering.cart.cart import Cart
from ordering.cart.engine import CartAction
from ordering.order.order import OrderStatus, PaymentStatus, ShippingAddress
from ordering.pricing.policy import PriceBreakdown


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class ApplyCartActionRequest(BaseModel):
    cart: Cart = Field(default_factory=Cart)
    action: CartAction

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "cart": {"lines": []},
                    "action": {
                        "type": "ADD_ITEM",
                        "line": {
                            "product_id": "p1",
                            "size": "M",
                            "color": "Red",
                            "unit_price": 300000,
                            "quantity": 2,
                            "name": "Embroidered Kurta",
                            "category": "traditional",
                        },
                    },
                }
            ]
        }
    }


class AddProductToCartRequest(BaseModel):
    cart: Cart = Field(default_factory=Cart)
    product_id: str
    size: str = ""
    color: str = ""
    quantity: int = 1


class MergeCartsRequest(BaseModel):
    saved: Cart = Field(default_factory=Cart)
    guest: Cart = Field(default_factory=Cart)


class QuoteRequest(BaseModel):
    cart: Cart


class CheckoutRequest(BaseModel):
    cart: Cart
    shipping_address: ShippingAddress
    payment_method: str = "cash_on_delivery"
    notes: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "cart": {
                        "lines": [
                            {
                                "product_id": "p1",
                                "size": "M",
                                "color": "Red",
                                "unit_price": 300000,
                                "quantity": 2,
                            }
                        ]
                    },
                    "shipping_address": {
                        "full_name": "Ayesha Khan",
                        "street": "12 Mall Road",
                        "city": "Lahore",
                        "state": "Punjab",
                        "postal_code": "54000",
                        "country": "Pakistan",
                        "phone": "+923001234567",
                    },
                    "payment_method": "cash_on_delivery",
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatus


class UpdatePaymentStatusRequest(BaseModel):
    payment_status: PaymentStatus


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartResponse(BaseModel):
    cart: Cart
    pricing: PriceBreakdown
    amount_to_free_shipping: int


class CheckoutResponse(BaseModel):
    order_id: str
    total: int
    warnings: list[str] = []


class OrderTransitionsResponse(BaseModel):
    order_id: str
    status: OrderStatus
    payment_status: PaymentStatus
    next_statuses: list[OrderStatus]
    next_payment_statuses: list[PaymentStatus]
