"""Tests for snapshotting catalogue products into cart lines."""

import pytest

from catalogue.product.port import InMemoryCatalogue, ProductNotFound
from catalogue.product.product import Product
from ordering.cart.cart import Cart
from ordering.cart.catalogue import add_to_cart_action, line_from_product
from ordering.cart.engine import apply
from shared.exceptions import InsufficientStock, InvalidQuantity, InvalidSelection


def _product(**overrides):
    values = {
        "id": "kurta-01",
        "name": "Embroidered Kurta",
        "price": 300_000,
        "category": "traditional",
        "sizes": ("S", "M", "L"),
        "colors": ("Red", "Blue"),
        "stock": 10,
        "images": ("kurta-front.jpg", "kurta-back.jpg"),
    }
    values.update(overrides)
    return Product(**values)


class TestLineFromProduct:
    def test_captures_price_and_metadata(self):
        line = line_from_product(_product(), size="M", color="Red", quantity=2)
        assert line.unit_price == 300_000
        assert line.quantity == 2
        assert line.name == "Embroidered Kurta"
        assert line.image == "kurta-front.jpg"
        assert line.category == "traditional"

    def test_missing_size_is_rejected(self):
        with pytest.raises(InvalidSelection) as exc:
            line_from_product(_product(), color="Red")
        assert "size" in exc.value.messages

    def test_unoffered_color_is_rejected(self):
        with pytest.raises(InvalidSelection) as exc:
            line_from_product(_product(), size="M", color="Green")
        assert "color" in exc.value.messages

    def test_option_on_product_without_options_is_rejected(self):
        with pytest.raises(InvalidSelection):
            line_from_product(_product(sizes=(), colors=()), size="M")

    def test_product_without_options_needs_no_selection(self):
        line = line_from_product(_product(sizes=(), colors=()))
        assert line.size == ""
        assert line.color == ""

    def test_unpublished_product_is_rejected(self):
        with pytest.raises(InvalidSelection):
            line_from_product(_product(is_published=False), size="M", color="Red")

    def test_quantity_beyond_stock_is_rejected(self):
        with pytest.raises(InsufficientStock):
            line_from_product(_product(stock=1), size="M", color="Red", quantity=2)

    def test_zero_quantity_is_rejected(self):
        with pytest.raises(InvalidQuantity):
            line_from_product(_product(), size="M", color="Red", quantity=0)


class TestAddToCartAction:
    def test_builds_add_action_from_catalogue(self):
        catalogue = InMemoryCatalogue([_product()])
        action = add_to_cart_action(catalogue, "kurta-01", size="L", color="Blue")
        cart = apply(Cart.empty(), action)
        assert cart.lines[0].variant_key.size == "L"
        assert cart.subtotal == 300_000

    def test_later_price_change_does_not_reach_existing_line(self):
        catalogue = InMemoryCatalogue([_product()])
        cart = apply(Cart.empty(), add_to_cart_action(catalogue, "kurta-01", size="M", color="Red"))

        catalogue.add(_product(price=350_000))
        cart = apply(cart, add_to_cart_action(catalogue, "kurta-01", size="M", color="Red"))

        assert cart.lines[0].quantity == 2
        assert cart.lines[0].unit_price == 300_000

    def test_unknown_product_raises(self):
        with pytest.raises(ProductNotFound):
            add_to_cart_action(InMemoryCatalogue(), "missing")

    def test_repeated_adds_cannot_exceed_stock(self):
        catalogue = InMemoryCatalogue([_product(stock=3)])
        cart = apply(Cart.empty(), add_to_cart_action(catalogue, "kurta-01", size="M", color="Red", quantity=2))

        with pytest.raises(InsufficientStock):
            add_to_cart_action(catalogue, "kurta-01", size="M", color="Red", quantity=2, cart=cart)

        cart = apply(cart, add_to_cart_action(catalogue, "kurta-01", size="M", color="Red", quantity=1, cart=cart))
        assert cart.lines[0].quantity == 3

    def test_other_variants_of_product_count_against_stock(self):
        catalogue = InMemoryCatalogue([_product(stock=3)])
        cart = apply(Cart.empty(), add_to_cart_action(catalogue, "kurta-01", size="L", color="Blue", quantity=2))

        with pytest.raises(InsufficientStock):
            add_to_cart_action(catalogue, "kurta-01", size="M", color="Red", quantity=2, cart=cart)

    def test_stock_counts_units_already_in_cart(self):
        with pytest.raises(InsufficientStock):
            line_from_product(_product(stock=3), size="M", color="Red", quantity=1, in_cart=3)
