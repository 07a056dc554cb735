"""Order store abstraction — pluggable order persistence."""

import os

_store_instance = None


def get_order_store():
    """Return the configured order store (singleton).

    Uses the in-memory store by default. Set ORDER_STORE_ADAPTER=sql and
    ORDER_STORE_DATABASE_URI to persist orders through SQLAlchemy.
    """
    global _store_instance
    if _store_instance is None:
        adapter = os.environ.get("ORDER_STORE_ADAPTER", "memory")
        if adapter == "memory":
            from ordering.store.memory_adapter import InMemoryOrderStore

            _store_instance = InMemoryOrderStore()
        elif adapter == "sql":
            from ordering.store.sql_adapter import SqlOrderStore

            _store_instance = SqlOrderStore(os.environ.get("ORDER_STORE_DATABASE_URI", "sqlite://"))
            _store_instance.setup_db()
        else:
            raise ValueError(f"Unknown order store adapter: {adapter}")
    return _store_instance


def reset_order_store():
    """Reset the store singleton (useful for testing)."""
    global _store_instance
    _store_instance = None
