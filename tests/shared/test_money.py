"""Tests for minor-unit money helpers."""

from decimal import Decimal

import pytest

from shared.money import format_money, round_minor, to_decimal, to_major, to_minor


class TestConversions:
    @pytest.mark.parametrize(
        ("major", "minor"),
        [("10000", 1_000_000), ("99.99", 9_999), (Decimal("0.005"), 1), (19.99, 1_999)],
    )
    def test_to_minor(self, major, minor):
        assert to_minor(major) == minor

    def test_to_major(self):
        assert to_major(1_000_050) == Decimal("10000.50")

    def test_float_rate_has_no_binary_drift(self):
        assert to_decimal(0.16) == Decimal("0.16")

    @pytest.mark.parametrize(("value", "expected"), [("2.5", 3), ("2.4999", 2), ("-2.5", -3)])
    def test_round_half_up(self, value, expected):
        assert round_minor(Decimal(value)) == expected


class TestFormatMoney:
    def test_whole_units(self):
        assert format_money(1_000_000) == "PKR 10,000"

    def test_with_decimals(self):
        assert format_money(1_000_050, decimals=True) == "PKR 10,000.50"

    def test_other_currency(self):
        assert format_money(2_500, currency="USD", decimals=True) == "USD 25.00"
