"""Call sources (arrival processes and dialers) and their activation schedule."""

from __future__ import annotations

import logging
import math
import random
from bisect import bisect_right
from collections.abc import Sequence
from typing import Optional

from ccsim.errors import ConfigurationError, CreationError, CreationStage
from ccsim.streams import ArrivalProcessStreamType, DialerStreamType, RandomStreams

from .calendar import ModelContext
from .interval import TimeInterval, check_intervals, create_intervals, sorted_intervals
from .named import NamedInfo
from .spec import ArrivalProcessSpec, CallSourceSpec, DialerSpec


logger = logging.getLogger(__name__)


def flatten_windows(intervals: Sequence[TimeInterval]) -> tuple[float, ...]:
    """Flatten non-overlapping windows to ``(s0, e0, s1, e1, ...)``.

    Touching windows are merged so that the result is strictly increasing.
    """
    times: list[float] = []
    for interval in sorted_intervals(intervals):
        if times and times[-1] == interval.start:
            times[-1] = interval.end
        else:
            times.extend((interval.start, interval.end))
    return tuple(times)


def validate_toggle_times(times: Sequence[float]) -> tuple[float, ...]:
    values = tuple(float(value) for value in times)
    if len(values) % 2 != 0:
        raise ConfigurationError(
            f"source toggle times must contain an even number of values, got {len(values)}"
        )
    for idx, value in enumerate(values):
        if not math.isfinite(value):
            raise ConfigurationError(f"source toggle time {idx} must be finite, got {value}")
        if idx > 0 and value <= values[idx - 1]:
            raise ConfigurationError(
                f"source toggle times must be strictly increasing: "
                f"value {idx} ({value:g}) <= value {idx - 1} ({values[idx - 1]:g})"
            )
    return values


class CallSourceManager(NamedInfo):
    """Static enable flag of a call source plus its scheduled toggle times.

    When toggle times are present, the source produces calls during each
    ``[toggle_times[2k], toggle_times[2k + 1])`` window, provided it is enabled.
    Without toggle times, an enabled source is active during the main periods
    of the calendar. Invalid toggle intervals raise a :class:`CreationError`
    of the source's ``stage``.
    """

    stage = CreationStage.ARRIVAL_PROCESS

    def __init__(self, ctx: ModelContext, params: CallSourceSpec, index: Optional[int] = None) -> None:
        super().__init__(params.name, params.properties)
        self._toggle_times: Optional[tuple[float, ...]] = None
        if params.toggle_intervals is not None:
            try:
                intervals = create_intervals(ctx, params.toggle_intervals)
                check_intervals(intervals)
            except ConfigurationError as exc:
                where = f"{index} " if index is not None else ""
                raise CreationError(
                    self.stage,
                    f"{self.stage.label} {where}'{params.name}' has invalid toggle intervals",
                    exc,
                ) from exc
            self._toggle_times = flatten_windows(intervals)
        self._enabled = params.enabled

    def is_source_enabled(self) -> bool:
        return self._enabled

    def get_source_toggle_times(self) -> Optional[tuple[float, ...]]:
        if self._toggle_times is None:
            return None
        return tuple(self._toggle_times)

    def set_source_toggle_times(self, times: Optional[Sequence[float]]) -> None:
        """Replace the whole schedule; ``None`` clears it."""
        if times is None:
            self._toggle_times = None
            return
        self._toggle_times = validate_toggle_times(times)

    def active_windows(self, ctx: ModelContext) -> list[tuple[float, float]]:
        if not self._enabled:
            return []
        if self._toggle_times is None:
            return [ctx.main_window()]
        times = self._toggle_times
        return [(times[i], times[i + 1]) for i in range(0, len(times), 2)]

    def is_active_at(self, ctx: ModelContext, time: float) -> bool:
        if not self._enabled:
            return False
        if self._toggle_times is None:
            start, end = ctx.main_window()
            return start <= time < end
        # An odd insertion point falls inside a [start, end) window.
        return bisect_right(self._toggle_times, time) % 2 == 1


class ArrivalProcessManager(CallSourceManager):
    """Arrival process producing inbound calls of one call type."""

    def __init__(
        self,
        ctx: ModelContext,
        params: ArrivalProcessSpec,
        index: int,
        streams: RandomStreams,
        call_type_index: int,
    ) -> None:
        super().__init__(ctx, params, index)
        self.index = index
        self.call_type = params.call_type
        self.call_type_index = call_type_index
        self.kind = params.kind
        self.params = dict(params.params)
        self._streams = streams
        logger.debug(
            "arrival process %s built (index=%d, enabled=%s, toggles=%s)",
            self.name,
            index,
            self.is_source_enabled(),
            self.get_source_toggle_times(),
        )

    def stream(self, role: ArrivalProcessStreamType) -> random.Random:
        return self._streams.arrival_process_stream(self.index, role)


class DialerManager(CallSourceManager):
    """Outbound dialer producing calls of one call type."""

    stage = CreationStage.DIALER

    def __init__(
        self,
        ctx: ModelContext,
        params: DialerSpec,
        index: int,
        streams: RandomStreams,
        call_type_index: int,
    ) -> None:
        super().__init__(ctx, params, index)
        self.index = index
        self.call_type = params.call_type
        self.call_type_index = call_type_index
        self.prob_reach = params.prob_reach
        self.params = dict(params.params)
        self._streams = streams
        logger.debug(
            "dialer %s built (index=%d, enabled=%s, toggles=%s)",
            self.name,
            index,
            self.is_source_enabled(),
            self.get_source_toggle_times(),
        )

    def stream(self, role: DialerStreamType) -> random.Random:
        return self._streams.dialer_stream(self.index, role)

    def reach_test(self) -> bool:
        """Draw whether the next dialed call reaches a customer."""
        return self.stream(DialerStreamType.REACHTEST).random() < self.prob_reach
