"""Model calendar: time-unit conversion and main-period boundaries."""

from __future__ import annotations

import math
import re
from datetime import time, timedelta
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ccsim.errors import ConfigurationError

from .spec import CalendarSpec, TimeUnit


_PERIOD_REF = re.compile(r"^period(?P<end>_end)?:(?P<index>\d+)$")
_DURATION = TypeAdapter(timedelta)
_CLOCK = TypeAdapter(time)


def _clock_seconds(text: str) -> float:
    """Length of an ISO-8601 duration, or offset from midnight of an ``HH:MM[:SS]`` clock time, in seconds."""
    try:
        if text.startswith("P"):
            if text.endswith(("P", "T")):
                raise ConfigurationError(f"incomplete duration {text!r}")
            return _DURATION.validate_python(text).total_seconds()
        clock = _CLOCK.validate_python(text)
    except ValidationError as exc:
        raise ConfigurationError(f"cannot parse time value {text!r}") from exc
    return clock.hour * 3600.0 + clock.minute * 60.0 + clock.second + clock.microsecond / 1e6


class ModelContext:
    """Calendar shared by every build function of one model instance.

    Times are expressed in the configured default unit. Main periods are
    indexed from 0; period ``p`` covers
    ``[period_start + p * period_duration, period_start + (p + 1) * period_duration)``.
    """

    def __init__(self, calendar: CalendarSpec) -> None:
        self._unit = TimeUnit(calendar.time_unit)
        self._period_start = self._convert(calendar.period_start, allow_period_refs=False)
        self._period_duration = self._convert(calendar.period_duration, allow_period_refs=False)
        if self._period_duration <= 0:
            raise ConfigurationError(
                f"period duration must be > 0, got {calendar.period_duration!r}"
            )
        self._num_periods = calendar.num_periods

    @property
    def time_unit(self) -> TimeUnit:
        return self._unit

    @property
    def period_start(self) -> float:
        return self._period_start

    @property
    def period_duration(self) -> float:
        return self._period_duration

    @property
    def num_periods(self) -> int:
        return self._num_periods

    def get_time(self, value: Any) -> float:
        """Resolve a configuration time value to the default time unit."""
        return self._convert(value, allow_period_refs=True)

    def period_starting_time(self, period: int) -> float:
        self._check_period(period)
        return self._period_start + period * self._period_duration

    def period_ending_time(self, period: int) -> float:
        self._check_period(period)
        return self._period_start + (period + 1) * self._period_duration

    def main_window(self) -> tuple[float, float]:
        return self._period_start, self._period_start + self._num_periods * self._period_duration

    def main_period(self, time: float) -> int:
        """Main period containing ``time``: -1 before the first, ``num_periods`` after the last."""
        if time < self._period_start:
            return -1
        index = int(math.floor((time - self._period_start) / self._period_duration))
        return min(index, self._num_periods)

    def is_period_starting_time(self, time: float) -> bool:
        offset = (time - self._period_start) / self._period_duration
        return math.isclose(offset, round(offset), abs_tol=1e-9)

    def _check_period(self, period: int) -> None:
        if period < 0 or period >= self._num_periods:
            raise ConfigurationError(
                f"main period {period} out of range [0, {self._num_periods - 1}]"
            )

    def _convert(self, value: Any, *, allow_period_refs: bool) -> float:
        if isinstance(value, bool):
            raise ConfigurationError(f"invalid time value {value!r}")
        if isinstance(value, (int, float)):
            result = float(value)
        elif isinstance(value, str):
            result = self._convert_text(value.strip(), allow_period_refs=allow_period_refs)
        else:
            raise ConfigurationError(f"invalid time value {value!r}")
        if not math.isfinite(result):
            raise ConfigurationError(f"time value must be finite, got {value!r}")
        return result

    def _convert_text(self, text: str, *, allow_period_refs: bool) -> float:
        match = _PERIOD_REF.match(text)
        if match:
            if not allow_period_refs:
                raise ConfigurationError(f"period reference not allowed here: {text!r}")
            index = int(match.group("index"))
            if match.group("end"):
                return self.period_ending_time(index)
            return self.period_starting_time(index)
        try:
            return float(text)
        except ValueError:
            pass
        if not text.startswith("P") and ":" not in text:
            raise ConfigurationError(f"cannot parse time value {text!r}")
        return _clock_seconds(text) / self._unit.seconds
