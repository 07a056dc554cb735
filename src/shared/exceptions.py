"""Domain error taxonomy shared by the ordering and analytics contexts.

Every error carries a ``messages`` dict keyed by the offending field, e.g.
``{"status": ["Cannot transition from Shipped to Processing"]}``, so callers
(the admin API, a CLI) can surface the reason next to the right input.
"""


class DomainError(Exception):
    """Base class for recoverable errors raised by the storefront core."""

    def __init__(self, messages: dict[str, list[str]] | str):
        if isinstance(messages, str):
            messages = {"_entity": [messages]}
        self.messages = messages
        super().__init__(messages)

    def __str__(self) -> str:
        return "; ".join(f"{field}: {', '.join(errors)}" for field, errors in self.messages.items())


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class InvalidQuantity(DomainError):
    """A quantity of zero or less was supplied where at least one unit is required."""


class InvalidSelection(DomainError):
    """A size or color that the product does not offer was selected."""


class InsufficientStock(DomainError):
    """More units were requested than the catalogue has in stock."""


class EmptyCart(DomainError):
    """Checkout was attempted with no lines in the cart."""


# ---------------------------------------------------------------------------
# Order lifecycle
# ---------------------------------------------------------------------------
class IllegalTransition(DomainError):
    """The requested status or payment-status edge is not allowed."""


class PaymentNotSettled(DomainError):
    """The order cannot be marked delivered while its payment has failed."""


class InvalidTimestamp(DomainError):
    """An order timestamp was supplied without a timezone."""


class OrderNotFound(DomainError):
    """No order exists with the requested identifier."""


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------
class AggregationInputError(DomainError):
    """The aggregation window or its parameters are malformed."""
