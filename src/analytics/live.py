"""Live analytics: re-aggregate the full data set whenever a new snapshot arrives.

Each run starts from the complete current collections; nothing is carried
over from the previous run. When newer data arrives while a run is still in
flight, the older run is cancelled and its result, should it still finish,
is discarded rather than merged.
"""

import asyncio
from collections.abc import Callable
from functools import partial

import structlog

from analytics.aggregator import aggregate
from analytics.snapshot import AnalyticsSnapshot
from analytics.window import Window

logger = structlog.get_logger(__name__)


class LiveAggregator:
    """Keeps ``latest`` in step with the most recent data snapshot.

    ``window`` is either a fixed ``Window`` or a zero-argument callable
    returning one (e.g. ``lambda: Window.last("30days")`` for a rolling view).
    ``on_snapshot`` is called with each snapshot that is not superseded.
    """

    def __init__(
        self,
        window: Window | Callable[[], Window],
        on_snapshot: Callable[[AnalyticsSnapshot], None] | None = None,
        **aggregate_options,
    ) -> None:
        self._window = window
        self._on_snapshot = on_snapshot
        self._options = aggregate_options
        self._generation = 0
        self._inflight: asyncio.Future | None = None
        self._runs: set[asyncio.Future] = set()
        self.latest: AnalyticsSnapshot | None = None
        self.discarded = 0

    def _current_window(self) -> Window:
        return self._window() if callable(self._window) else self._window

    async def publish(self, orders, products=(), users=()) -> AnalyticsSnapshot | None:
        """Aggregate a new data snapshot; returns ``None`` if a newer one overtook it."""
        self._generation += 1
        generation = self._generation

        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()

        run = partial(
            aggregate,
            list(orders),
            list(products),
            list(users),
            self._current_window(),
            **self._options,
        )
        inflight = asyncio.ensure_future(asyncio.to_thread(run))
        self._inflight = inflight

        try:
            snapshot = await inflight
        except asyncio.CancelledError:
            if generation != self._generation:
                self.discarded += 1
                logger.debug("Superseded analytics run cancelled", generation=generation)
                return None
            raise

        if generation != self._generation:
            self.discarded += 1
            logger.debug("Superseded analytics result discarded", generation=generation)
            return None

        self.latest = snapshot
        if self._on_snapshot is not None:
            self._on_snapshot(snapshot)
        return snapshot

    async def consume(self, snapshots) -> AnalyticsSnapshot | None:
        """Follow an async stream of ``(orders, products, users)`` tuples.

        Every arrival starts a fresh run over that arrival's full data and
        supersedes any run still in flight. Returns the final ``latest``.
        """
        last = None
        async for orders, products, users in snapshots:
            last = asyncio.ensure_future(self.publish(orders, products, users))
            # Finished runs are dropped so a long stream holds no old snapshots
            self._runs.add(last)
            last.add_done_callback(self._runs.discard)
            await asyncio.sleep(0)
        if self._runs:
            await asyncio.gather(*self._runs)
        if last is not None:
            await last
        return self.latest
