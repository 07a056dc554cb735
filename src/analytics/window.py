"""Aggregation windows: half-open ``[start, end)`` time ranges."""

from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, ConfigDict, model_validator

from shared.exceptions import AggregationInputError

RANGE_PRESETS = {
    "7days": timedelta(days=7),
    "30days": timedelta(days=30),
    "90days": timedelta(days=90),
}


def _one_year_before(moment: datetime) -> datetime:
    try:
        return moment.replace(year=moment.year - 1)
    except ValueError:  # 29 February
        return moment.replace(year=moment.year - 1, day=28)


class Window(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @model_validator(mode="after")
    def _must_be_well_formed(self):
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise AggregationInputError({"window": ["Window bounds must carry a timezone"]})
        if self.start > self.end:
            raise AggregationInputError(
                {"window": [f"Window start {self.start.isoformat()} is after end {self.end.isoformat()}"]}
            )
        return self

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment < self.end

    def previous(self) -> "Window":
        """The window of equal length ending where this one starts."""
        return Window(start=self.start - self.duration, end=self.start)

    @classmethod
    def last(cls, range_name: str = "30days", now: datetime | None = None) -> "Window":
        """Window covering the named range up to ``now``.

        ``range_name`` is one of ``7days``, ``30days``, ``90days``, ``1year``.
        The end is exclusive, so ``now`` itself falls just outside; it is
        nudged forward by a microsecond to keep the latest order in range.
        """
        now = now or datetime.now(UTC)
        end = now + timedelta(microseconds=1)
        if range_name == "1year":
            return cls(start=_one_year_before(now), end=end)
        if range_name not in RANGE_PRESETS:
            raise AggregationInputError(
                {"range": [f"Unknown range {range_name!r}; use one of {', '.join([*RANGE_PRESETS, '1year'])}"]}
            )
        return cls(start=now - RANGE_PRESETS[range_name], end=end)
