"""Pricing engine: derive shipping, tax and total from a subtotal and a policy.

All arithmetic is on integer minor units and ``Decimal`` rates, so pricing the
same cart twice always yields identical amounts. Tax is rounded half-up to a
whole minor unit.

Free shipping applies only when the subtotal is strictly greater than the
threshold: a subtotal equal to the threshold still pays the flat fee.
"""

from decimal import Decimal

import structlog

from ordering.pricing.policy import PriceBreakdown, PricingPolicy
from shared.money import round_minor

logger = structlog.get_logger(__name__)


def shipping_cost(subtotal: int, policy: PricingPolicy) -> int:
    if subtotal > policy.free_shipping_threshold:
        return 0
    return policy.shipping_flat_fee


def tax_amount(subtotal: int, policy: PricingPolicy) -> int:
    return round_minor(Decimal(subtotal) * policy.tax_rate)


def price_subtotal(subtotal: int, policy: PricingPolicy) -> PriceBreakdown:
    """Price a raw subtotal (minor units)."""
    shipping = shipping_cost(subtotal, policy)
    tax = tax_amount(subtotal, policy)
    return PriceBreakdown(
        subtotal=subtotal,
        shipping_cost=shipping,
        tax_amount=tax,
        total=subtotal + shipping + tax,
    )


def price(cart, policy: PricingPolicy) -> PriceBreakdown:
    """Price a cart under ``policy``."""
    breakdown = price_subtotal(cart.subtotal, policy)
    logger.debug(
        "Cart priced",
        item_count=cart.item_count,
        subtotal=breakdown.subtotal,
        total=breakdown.total,
    )
    return breakdown


def amount_to_free_shipping(subtotal: int, policy: PricingPolicy) -> int:
    """Smallest amount that must still be added before shipping becomes free.

    Returns 0 once the subtotal already qualifies.
    """
    if subtotal > policy.free_shipping_threshold:
        return 0
    return policy.free_shipping_threshold - subtotal + 1
