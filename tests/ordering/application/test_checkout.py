"""Tests for checkout — order placement with a non-blocking confirmation email."""

from datetime import UTC, datetime

import pytest

from notifications.channel.fake_email import FakeEmailAdapter
from ordering.cart.cart import Cart
from ordering.checkout.checkout import checkout
from ordering.order.order import OrderStatus
from ordering.store.memory_adapter import InMemoryOrderStore
from shared.exceptions import EmptyCart

PLACED_AT = datetime(2024, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture()
def store():
    return InMemoryOrderStore()


@pytest.fixture()
def notifier():
    return FakeEmailAdapter()


def _checkout(cart, policy, customer, address, store, notifier):
    return checkout(
        cart,
        policy,
        customer=customer,
        shipping_address=address,
        payment_method="cash_on_delivery",
        store=store,
        notifier=notifier,
        now=PLACED_AT,
    )


class TestSuccessfulCheckout:
    def test_persists_pending_order(self, cart, policy, customer, address, store, notifier):
        result = _checkout(cart, policy, customer, address, store, notifier)

        stored = store.get_order(result.order_id)
        assert stored == result.order
        assert stored.status == OrderStatus.PENDING
        assert stored.total == 746_000

    def test_returns_empty_cart(self, cart, policy, customer, address, store, notifier):
        result = _checkout(cart, policy, customer, address, store, notifier)
        assert result.cart.is_empty
        assert result.warnings == []

    def test_sends_confirmation(self, cart, policy, customer, address, store, notifier):
        result = _checkout(cart, policy, customer, address, store, notifier)

        assert len(notifier.sent_emails) == 1
        email = notifier.sent_emails[0]
        assert email["to"] == "ayesha@example.com"
        assert email["order_id"] == result.order_id
        assert email["total"] == 746_000

    def test_caller_cart_is_untouched(self, cart, policy, customer, address, store, notifier):
        _checkout(cart, policy, customer, address, store, notifier)
        assert cart.item_count == 2


class TestConfirmationFailure:
    def test_failed_send_becomes_warning(self, cart, policy, customer, address, store, notifier):
        notifier.configure(should_succeed=False, failure_reason="Mailbox full")

        result = _checkout(cart, policy, customer, address, store, notifier)

        assert store.get_order(result.order_id) == result.order
        assert result.cart.is_empty
        assert len(result.warnings) == 1
        assert "Mailbox full" in result.warnings[0]

    def test_raising_sender_becomes_warning(self, cart, policy, customer, address, store, notifier):
        notifier.configure(raise_error=True, failure_reason="SMTP timeout")

        result = _checkout(cart, policy, customer, address, store, notifier)

        assert len(store.list_orders()) == 1
        assert "SMTP timeout" in result.warnings[0]


class TestCheckoutRejections:
    def test_empty_cart_places_nothing(self, policy, customer, address, store, notifier):
        with pytest.raises(EmptyCart):
            _checkout(Cart.empty(), policy, customer, address, store, notifier)
        assert store.list_orders() == []
        assert notifier.sent_emails == []

    def test_store_failure_propagates_without_email(self, cart, policy, customer, address, store, notifier):
        store.configure(fail_writes=True)

        with pytest.raises(ConnectionError):
            _checkout(cart, policy, customer, address, store, notifier)

        assert store.list_orders() == []
        assert notifier.sent_emails == []
