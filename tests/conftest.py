import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Pin the storefront environment and the in-memory adapters so no test
    reaches a real store or mail provider.
    """
    os.environ["STOREFRONT_ENV"] = session.config.option.env
    os.environ.setdefault("ORDER_STORE_ADAPTER", "memory")
    os.environ.setdefault("EMAIL_ADAPTER", "fake")
    os.environ.setdefault("CATALOGUE_ADAPTER", "memory")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically reset adapter singletons after every test"""
    yield

    from catalogue.product import reset_catalogue
    from identity.customer.directory import reset_customer_directory
    from notifications.channel import reset_channels
    from ordering.store import reset_order_store

    reset_order_store()
    reset_channels()
    reset_catalogue()
    reset_customer_directory()
