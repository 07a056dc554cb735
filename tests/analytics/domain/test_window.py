"""Tests for half-open aggregation windows and range presets."""

from datetime import UTC, datetime, timedelta

import pytest

from analytics.window import Window
from shared.exceptions import AggregationInputError

START = datetime(2024, 3, 1, tzinfo=UTC)
END = datetime(2024, 3, 31, tzinfo=UTC)


class TestWindow:
    def test_contains_start_but_not_end(self):
        window = Window(start=START, end=END)
        assert window.contains(START)
        assert window.contains(END - timedelta(microseconds=1))
        assert not window.contains(END)
        assert not window.contains(START - timedelta(seconds=1))

    def test_empty_window_is_allowed(self):
        window = Window(start=START, end=START)
        assert window.duration == timedelta(0)
        assert not window.contains(START)

    def test_start_after_end_is_rejected(self):
        with pytest.raises(AggregationInputError) as exc:
            Window(start=END, end=START)
        assert "window" in exc.value.messages

    def test_naive_bounds_are_rejected(self):
        with pytest.raises(AggregationInputError):
            Window(start=datetime(2024, 3, 1), end=END)

    def test_previous_window_abuts(self):
        window = Window(start=START, end=END)
        previous = window.previous()
        assert previous.end == START
        assert previous.duration == window.duration


class TestRangePresets:
    NOW = datetime(2024, 3, 15, 12, 0, tzinfo=UTC)

    @pytest.mark.parametrize(("range_name", "days"), [("7days", 7), ("30days", 30), ("90days", 90)])
    def test_day_ranges(self, range_name, days):
        window = Window.last(range_name, now=self.NOW)
        assert window.start == self.NOW - timedelta(days=days)
        assert window.contains(self.NOW)

    def test_one_year(self):
        window = Window.last("1year", now=self.NOW)
        assert window.start == datetime(2023, 3, 15, 12, 0, tzinfo=UTC)

    def test_one_year_from_leap_day(self):
        window = Window.last("1year", now=datetime(2024, 2, 29, tzinfo=UTC))
        assert window.start == datetime(2023, 2, 28, tzinfo=UTC)

    def test_unknown_range(self):
        with pytest.raises(AggregationInputError) as exc:
            Window.last("fortnight", now=self.NOW)
        assert "range" in exc.value.messages
