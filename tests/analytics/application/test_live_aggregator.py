"""Tests for live re-aggregation with supersession of stale runs."""

import asyncio
from datetime import UTC, datetime

from analytics.live import LiveAggregator
from analytics.window import Window

MARCH = Window(start=datetime(2024, 3, 1, tzinfo=UTC), end=datetime(2024, 4, 1, tzinfo=UTC))


def _orders(order_factory, count):
    return [order_factory(datetime(2024, 3, day + 1, 12, tzinfo=UTC)) for day in range(count)]


class TestPublish:
    def test_sets_latest_and_notifies(self, order_factory, products, users):
        received = []
        live = LiveAggregator(MARCH, on_snapshot=received.append)

        snapshot = asyncio.run(live.publish(_orders(order_factory, 2), products, users))

        assert snapshot.summary.order_count == 2
        assert live.latest is snapshot
        assert received == [snapshot]

    def test_each_run_starts_from_full_data(self, order_factory, products, users):
        live = LiveAggregator(MARCH)

        async def run():
            await live.publish(_orders(order_factory, 3), products, users)
            return await live.publish(_orders(order_factory, 1), products, users)

        snapshot = asyncio.run(run())

        assert snapshot.summary.order_count == 1

    def test_passes_aggregate_options(self, order_factory, products, users):
        live = LiveAggregator(MARCH, tz="Asia/Karachi", max_days=1)
        snapshot = asyncio.run(live.publish(_orders(order_factory, 3), products, users))
        assert snapshot.timezone == "Asia/Karachi"
        assert len(snapshot.daily_revenue) == 1

    def test_window_factory_is_called_per_run(self, order_factory, products, users):
        calls = []

        def window():
            calls.append(1)
            return MARCH

        live = LiveAggregator(window)

        async def run():
            await live.publish(_orders(order_factory, 1), products, users)
            await live.publish(_orders(order_factory, 1), products, users)

        asyncio.run(run())
        assert len(calls) == 2


class TestSupersession:
    def test_newer_snapshot_supersedes_inflight_run(self, order_factory, products, users):
        received = []
        live = LiveAggregator(MARCH, on_snapshot=received.append)

        async def run():
            stale = asyncio.ensure_future(live.publish(_orders(order_factory, 5), products, users))
            await asyncio.sleep(0)
            fresh = await live.publish(_orders(order_factory, 2), products, users)
            return await stale, fresh

        stale, fresh = asyncio.run(run())

        assert stale is None
        assert fresh.summary.order_count == 2
        assert live.latest is fresh
        assert received == [fresh]
        assert live.discarded == 1

    def test_consume_ends_on_last_snapshot(self, order_factory, products, users):
        received = []
        live = LiveAggregator(MARCH, on_snapshot=received.append)

        async def stream():
            for count in (4, 1, 3):
                yield _orders(order_factory, count), products, users

        latest = asyncio.run(live.consume(stream()))

        assert latest.summary.order_count == 3
        assert received[-1] is latest
        assert len(received) + live.discarded == 3

    def test_consume_empty_stream(self):
        async def stream():
            return
            yield

        live = LiveAggregator(MARCH)
        assert asyncio.run(live.consume(stream())) is None

    def test_long_stream_does_not_retain_finished_runs(self, order_factory, products, users):
        live = LiveAggregator(MARCH)
        retained = []

        async def stream():
            for count in range(1, 21):
                retained.append(len(live._runs))
                yield _orders(order_factory, count % 5 + 1), products, users
                await asyncio.sleep(0.01)

        latest = asyncio.run(live.consume(stream()))

        assert latest.summary.order_count == 1
        assert max(retained) <= 2
        assert not live._runs
