"""Order store port (abstract interface).

The store is an external collaborator. The core relies on two guarantees:
``create_order`` is an atomic create, and ``update_order`` applies ``fn`` as
an atomic read-modify-write on a single order, so two admins editing the same
order cannot lose each other's update. Lifecycle functions are passed as
``fn``; they compute the next state and the store persists it.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from ordering.order.order import Order


class OrderStore(ABC):
    """Abstract order persistence interface."""

    @abstractmethod
    def create_order(self, order: Order) -> str:
        """Persist a new order and return its id."""
        ...

    @abstractmethod
    def get_order(self, order_id: str) -> Order:
        """Return the order or raise ``OrderNotFound``."""
        ...

    @abstractmethod
    def update_order(self, order_id: str, fn: Callable[[Order], Order]) -> Order:
        """Atomically replace the order with ``fn(current)`` and return the result.

        If ``fn`` raises, nothing is written and the exception propagates.
        """
        ...

    @abstractmethod
    def list_orders(self) -> list[Order]:
        """All orders, oldest first."""
        ...
