"""Half-open simulation-time intervals and their validation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from ccsim.errors import ConfigurationError

from .calendar import ModelContext
from .spec import ShiftPartSpec, TimeIntervalSpec


WORKING = "Working"


@dataclass(frozen=True, slots=True)
class TimeInterval:
    """A ``[start, end)`` window of simulation time."""

    start: float
    end: float

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ConfigurationError(
                f"the starting time {self.start} must be smaller than the ending time {self.end}"
            )

    @classmethod
    def from_spec(cls, ctx: ModelContext, spec: TimeIntervalSpec) -> "TimeInterval":
        return cls(ctx.get_time(spec.start), ctx.get_time(spec.end))

    def contains(self, time: float) -> bool:
        return self.start <= time < self.end

    def overlaps(self, other: "TimeInterval") -> bool:
        return self.start < other.end and other.start < self.end

    @property
    def duration(self) -> float:
        return self.end - self.start

    def __str__(self) -> str:
        return f"[{self.start:g}, {self.end:g})"


@dataclass(frozen=True, slots=True)
class ShiftPart(TimeInterval):
    """Part of an agent shift: a time interval tagged with an activity type."""

    type: Optional[str] = WORKING

    @classmethod
    def from_spec(cls, ctx: ModelContext, spec: ShiftPartSpec) -> "ShiftPart":  # type: ignore[override]
        return cls(ctx.get_time(spec.start), ctx.get_time(spec.end), spec.type)

    @property
    def is_working(self) -> bool:
        return self.type is not None and self.type.lower() == WORKING.lower()


def create_intervals(ctx: ModelContext, specs: Sequence[TimeIntervalSpec]) -> list[TimeInterval]:
    """Resolve interval descriptors against the calendar of ``ctx``."""
    intervals: list[TimeInterval] = []
    for idx, spec in enumerate(specs):
        try:
            intervals.append(TimeInterval.from_spec(ctx, spec))
        except ConfigurationError as exc:
            raise ConfigurationError(f"cannot initialize time interval {idx}: {exc}") from exc
    return intervals


def create_shift_parts(ctx: ModelContext, specs: Sequence[ShiftPartSpec]) -> list[ShiftPart]:
    parts: list[ShiftPart] = []
    for idx, spec in enumerate(specs):
        try:
            parts.append(ShiftPart.from_spec(ctx, spec))
        except ConfigurationError as exc:
            raise ConfigurationError(f"cannot initialize shift part {idx}: {exc}") from exc
    return parts


def check_intervals(intervals: Sequence[TimeInterval]) -> None:
    """Raise ``ConfigurationError`` if any two intervals overlap.

    Touching endpoints are allowed. Intervals are sorted by starting time
    before adjacent pairs are compared, so the check runs in O(n log n).
    """
    if len(intervals) < 2:
        return
    ordered = sorted(enumerate(intervals), key=lambda item: (item[1].start, item[1].end))
    for (prev_idx, prev), (next_idx, nxt) in zip(ordered, ordered[1:]):
        if nxt.start < prev.end:
            raise ConfigurationError(
                f"time interval {next_idx} {nxt} overlaps time interval {prev_idx} {prev}"
            )


def sorted_intervals(intervals: Sequence[TimeInterval]) -> list[TimeInterval]:
    return sorted(intervals, key=lambda interval: interval.start)
