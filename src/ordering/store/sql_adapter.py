"""SQL order store backed by SQLAlchemy Core.

Each order is one row: the persisted record (``ordering.order.records``) as a
JSON document, plus the columns admin listings filter on. ``created_at`` is
stored normalised to UTC so listings sort in time order across offsets.
``update_order`` runs its read-modify-write inside one transaction with the
row locked, so concurrent admin edits to the same order serialise. SQLite has
no row locks, so on SQLite every statement is serialised through an in-process
lock.
"""

import threading
from collections.abc import Callable
from contextlib import nullcontext
from datetime import UTC

import structlog
from sqlalchemy import JSON, Column, DateTime, MetaData, String, Table, create_engine, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

from ordering.order.order import Order
from ordering.order.records import from_record, to_record
from ordering.store.port import OrderStore
from shared.exceptions import OrderNotFound

logger = structlog.get_logger(__name__)

metadata = MetaData()

orders_table = Table(
    "orders",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("user_id", String(128), nullable=False, index=True),
    Column("status", String(32), nullable=False, index=True),
    Column("payment_status", String(32), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, index=True),
    Column("record", JSON, nullable=False),
)


def _engine_for(database_uri: str):
    if database_uri in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every checkout sees an empty database
        return create_engine(
            database_uri,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_uri)


def _row_values(order: Order) -> dict:
    record = to_record(order)
    return {
        "id": order.id,
        "user_id": order.user_id,
        "status": record["status"],
        "payment_status": record["payment_status"],
        "created_at": order.created_at.astimezone(UTC),
        "record": record,
    }


class SqlOrderStore(OrderStore):
    def __init__(self, database_uri: str = "sqlite://") -> None:
        self.engine = _engine_for(database_uri)
        self._lock = threading.RLock() if database_uri.startswith("sqlite") else nullcontext()

    def setup_db(self) -> None:
        """Create the orders table if it does not exist."""
        metadata.create_all(self.engine)

    def drop_db(self) -> None:
        metadata.drop_all(self.engine)

    def create_order(self, order: Order) -> str:
        try:
            with self._lock, self.engine.begin() as connection:
                connection.execute(insert(orders_table).values(**_row_values(order)))
        except IntegrityError:
            raise ValueError(f"Order {order.id} already exists") from None
        logger.debug("Order stored", order_id=order.id)
        return order.id

    def _fetch(self, connection, order_id: str, for_update: bool = False) -> Order:
        query = select(orders_table.c.record).where(orders_table.c.id == order_id)
        if for_update:
            query = query.with_for_update()
        record = connection.execute(query).scalar_one_or_none()
        if record is None:
            raise OrderNotFound({"order_id": [f"Order {order_id} not found"]})
        return from_record(record)

    def get_order(self, order_id: str) -> Order:
        with self._lock, self.engine.connect() as connection:
            return self._fetch(connection, order_id)

    def update_order(self, order_id: str, fn: Callable[[Order], Order]) -> Order:
        with self._lock, self.engine.begin() as connection:
            updated = fn(self._fetch(connection, order_id, for_update=True))
            if updated.id != order_id:
                raise ValueError("An order update cannot change the order id")
            connection.execute(
                update(orders_table).where(orders_table.c.id == order_id).values(**_row_values(updated))
            )
        return updated

    def list_orders(self) -> list[Order]:
        with self._lock, self.engine.connect() as connection:
            rows = connection.execute(select(orders_table.c.record).order_by(orders_table.c.created_at))
            return [from_record(record) for record in rows.scalars()]
