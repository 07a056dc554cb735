"""In-memory order store for development and testing.

Orders are kept in their persisted record shape (see
``ordering.order.records``) so the round trip through storage is exercised
exactly as a document store would. A lock serialises writes, standing in for
a real store's transactional update.
"""

import threading
from collections.abc import Callable

import structlog

from ordering.order.order import Order
from ordering.order.records import from_record, to_record
from ordering.store.port import OrderStore
from shared.exceptions import OrderNotFound

logger = structlog.get_logger(__name__)


class InMemoryOrderStore(OrderStore):
    def __init__(self) -> None:
        self._records: dict[str, dict] = {}
        self._lock = threading.Lock()
        self.fail_writes = False

    def configure(self, fail_writes: bool = False) -> None:
        """Make writes raise, to exercise store outage handling in tests."""
        self.fail_writes = fail_writes

    def _check_writable(self):
        if self.fail_writes:
            raise ConnectionError("Order store unavailable")

    def create_order(self, order: Order) -> str:
        with self._lock:
            self._check_writable()
            if order.id in self._records:
                raise ValueError(f"Order {order.id} already exists")
            self._records[order.id] = to_record(order)
        logger.debug("Order stored", order_id=order.id)
        return order.id

    def get_order(self, order_id: str) -> Order:
        record = self._records.get(order_id)
        if record is None:
            raise OrderNotFound({"order_id": [f"Order {order_id} not found"]})
        return from_record(record)

    def update_order(self, order_id: str, fn: Callable[[Order], Order]) -> Order:
        with self._lock:
            self._check_writable()
            updated = fn(self.get_order(order_id))
            if updated.id != order_id:
                raise ValueError("An order update cannot change the order id")
            self._records[order_id] = to_record(updated)
        return updated

    def list_orders(self) -> list[Order]:
        orders = [from_record(record) for record in list(self._records.values())]
        return sorted(orders, key=lambda order: order.created_at)

    def reset(self) -> None:
        with self._lock:
            self._records.clear()
            self.fail_writes = False
