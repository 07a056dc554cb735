from datetime import UTC, datetime

import pytest

from identity.customer.customer import Customer
from ordering.cart.cart import Cart, CartLine
from ordering.order.order import ShippingAddress
from ordering.pricing.policy import PricingPolicy

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture()
def policy():
    """PKR 500 shipping, free above PKR 10,000, 16% tax."""
    return PricingPolicy(tax_rate="0.16", shipping_flat_fee=50_000, free_shipping_threshold=1_000_000)


@pytest.fixture()
def customer():
    return Customer(user_id="user-001", email="ayesha@example.com", name="Ayesha Khan")


@pytest.fixture()
def address():
    return ShippingAddress(
        full_name="Ayesha Khan",
        street="12 Mall Road",
        city="Lahore",
        state="Punjab",
        postal_code="54000",
        country="Pakistan",
        phone="+923001234567",
    )


@pytest.fixture()
def cart():
    return Cart(
        lines=(
            CartLine(
                product_id="kurta-01",
                size="M",
                color="Red",
                unit_price=300_000,
                quantity=2,
                name="Embroidered Kurta",
                category="traditional",
            ),
        )
    )
