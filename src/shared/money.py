"""Money helpers: amounts are integer minor units (paisa, cents), never floats."""

from decimal import ROUND_HALF_UP, Decimal

VALID_CURRENCIES = frozenset(
    {
        "PKR",
        "USD",
        "EUR",
        "GBP",
        "AED",
        "SAR",
        "INR",
        "CAD",
        "AUD",
    }
)

MINOR_UNITS_PER_MAJOR = 100


def to_decimal(value) -> Decimal:
    """Convert a rate or major-unit amount to ``Decimal`` without binary float drift."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def round_minor(value: Decimal) -> int:
    """Round a fractional minor-unit amount half-up to a whole minor unit."""
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def to_minor(major) -> int:
    """Convert a major-unit amount (``"99.99"``, ``Decimal("10")``) to minor units."""
    return round_minor(to_decimal(major) * MINOR_UNITS_PER_MAJOR)


def to_major(minor: int) -> Decimal:
    return Decimal(minor) / MINOR_UNITS_PER_MAJOR


def format_money(minor: int, currency: str = "PKR", decimals: bool = False) -> str:
    """Render an amount for display, e.g. ``PKR 10,000`` or ``PKR 10,000.00``."""
    major = to_major(minor)
    if decimals:
        return f"{currency} {major:,.2f}"
    return f"{currency} {round_minor(major):,}"
