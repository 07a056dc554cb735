from datetime import UTC, datetime

import pytest

from catalogue.product.product import Product
from identity.customer.customer import Customer
from ordering.cart.cart import CartLine
from ordering.order.order import Order, OrderStatus, PaymentStatus, ShippingAddress
from ordering.pricing.policy import PriceBreakdown

_ADDRESS = ShippingAddress(
    street="12 Mall Road",
    city="Lahore",
    postal_code="54000",
    country="Pakistan",
    phone="+923001234567",
)


def make_order(
    created_at,
    lines=(("kurta-01", 100_000, 1, "traditional"),),
    shipping_cost=0,
    tax_amount=0,
    status=OrderStatus.PENDING,
    payment_status=PaymentStatus.PENDING,
    order_id=None,
):
    """Build a stored-shape order; ``lines`` are ``(product_id, unit_price, quantity, category)``."""
    items = tuple(
        CartLine(product_id=product_id, unit_price=unit_price, quantity=quantity, name=product_id, category=category)
        for product_id, unit_price, quantity, category in lines
    )
    subtotal = sum(item.line_total for item in items)
    values = {
        "user_id": "user-001",
        "user_email": "ayesha@example.com",
        "items": items,
        "pricing": PriceBreakdown(
            subtotal=subtotal,
            shipping_cost=shipping_cost,
            tax_amount=tax_amount,
            total=subtotal + shipping_cost + tax_amount,
        ),
        "shipping_address": _ADDRESS,
        "payment_method": "cash_on_delivery",
        "status": status,
        "payment_status": payment_status,
        "created_at": created_at,
        "updated_at": created_at,
    }
    if order_id is not None:
        values["id"] = order_id
    return Order(**values)


@pytest.fixture()
def order_factory():
    return make_order


@pytest.fixture()
def products():
    return [
        Product(id="kurta-01", name="Embroidered Kurta", price=100_000, category="traditional", stock=12),
        Product(id="dupatta-02", name="Chiffon Dupatta", price=50_000, category="accessories", stock=3),
        Product(id="shawl-03", name="Pashmina Shawl", price=250_000, category="winter", stock=0),
    ]


@pytest.fixture()
def users():
    return [
        Customer(user_id="user-001", email="ayesha@example.com", created_at=datetime(2024, 1, 5, tzinfo=UTC)),
        Customer(user_id="user-002", email="bilal@example.com", created_at=datetime(2024, 3, 10, tzinfo=UTC)),
        Customer(user_id="user-003", email="sana@example.com"),
    ]
