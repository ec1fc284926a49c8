"""SimPy-backed replay of source activation windows and agent shifts."""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any, Callable, Optional

import simpy

from ccsim.events import EventBus, EventType, SimEvent
from ccsim.model import AgentGroupManager, AgentInfo, CallCenter, CallSourceManager


logger = logging.getLogger(__name__)


class ActivationEngine:
    """Drive call sources and agents through their schedules on a SimPy clock.

    Only enabled sources are scheduled. A source with toggle times is started
    at each even-indexed time and stopped at the following one; a source
    without toggle times is active during the main periods of the calendar.
    """

    def __init__(self) -> None:
        self._env = simpy.Environment()
        self._event_bus = EventBus()
        self._events: list[SimEvent] = []
        self._subscribers: list[Callable[[SimEvent], None]] = []
        self._event_bus.subscribe(self._events.append)
        self._call_center: Optional[CallCenter] = None
        self._active_sources: dict[str, bool] = {}

    @property
    def now(self) -> float:
        return float(self._env.now)

    @property
    def events(self) -> list[SimEvent]:
        return list(self._events)

    def subscribe(self, handler: Callable[[SimEvent], None]) -> None:
        if handler in self._subscribers:
            return
        self._subscribers.append(handler)
        self._event_bus.subscribe(handler)

    def build(self, call_center: CallCenter) -> None:
        self.reset()
        self._call_center = call_center
        ctx = call_center.context
        self._env = simpy.Environment(initial_time=min(0.0, self._earliest_time(call_center)))

        self._env.process(self._period_changes())
        for source in call_center.call_sources:
            self._active_sources[source.name] = False
            windows = source.active_windows(ctx)
            if windows:
                self._env.process(self._switch(source, windows))
        for group in call_center.agent_groups:
            for info in group.agents:
                info.agent.init()
                parts = info.shift.working_parts()
                if parts:
                    self._env.process(self._shift(group, info))
        logger.debug("activation engine built for %s", call_center.name)

    def run(self, until: float | None = None) -> None:
        if self._call_center is None:
            raise RuntimeError("build() must be called before run()")
        horizon = until if until is not None else self._default_horizon()
        if horizon <= self._env.now:
            return
        self._env.run(until=horizon)

    def reset(self) -> None:
        self._env = simpy.Environment()
        self._event_bus.reset()
        self._event_bus.subscribe(self._events.append)
        for handler in self._subscribers:
            self._event_bus.subscribe(handler)
        self._events.clear()
        self._active_sources.clear()
        self._call_center = None

    def is_source_active(self, name: str) -> bool:
        if name not in self._active_sources:
            raise KeyError(name)
        return self._active_sources[name]

    def _default_horizon(self) -> float:
        assert self._call_center is not None
        duration = self._call_center.spec.sim.duration
        if duration is not None:
            return duration
        latest = self._call_center.context.main_window()[1]
        for source in self._call_center.call_sources:
            times = source.get_source_toggle_times()
            if times:
                latest = max(latest, times[-1])
        for group in self._call_center.agent_groups:
            for info in group.agents:
                for part in info.shift.parts:
                    latest = max(latest, part.end)
        # Run just past the last scheduled instant so that its events fire.
        return latest + 1e-9 * max(1.0, abs(latest))

    @staticmethod
    def _earliest_time(call_center: CallCenter) -> float:
        earliest = call_center.context.period_start
        for source in call_center.call_sources:
            times = source.get_source_toggle_times()
            if times:
                earliest = min(earliest, times[0])
        for group in call_center.agent_groups:
            for info in group.agents:
                for part in info.shift.parts:
                    earliest = min(earliest, part.start)
        return earliest

    def _wait_until(self, time: float) -> simpy.Timeout:
        return self._env.timeout(max(0.0, time - self._env.now))

    def _period_changes(self) -> Generator[simpy.Event, Any, None]:
        assert self._call_center is not None
        ctx = self._call_center.context
        for period in range(ctx.num_periods + 1):
            time = ctx.period_start + period * ctx.period_duration
            yield self._wait_until(time)
            self._event_bus.publish(
                event_type=EventType.PERIOD_CHANGE,
                time=time,
                payload={"main_period": period if period < ctx.num_periods else None},
            )

    def _switch(
        self,
        source: CallSourceManager,
        windows: list[tuple[float, float]],
    ) -> Generator[simpy.Event, Any, None]:
        for start, end in windows:
            yield self._wait_until(start)
            self._active_sources[source.name] = True
            self._event_bus.publish(event_type=EventType.SOURCE_START, time=start, source=source.name)
            yield self._wait_until(end)
            self._active_sources[source.name] = False
            self._event_bus.publish(event_type=EventType.SOURCE_STOP, time=end, source=source.name)

    def _shift(self, group: AgentGroupManager, info: AgentInfo) -> Generator[simpy.Event, Any, None]:
        for part in info.shift.working_parts():
            yield self._wait_until(part.start)
            info.agent.on_shift = True
            self._event_bus.publish(
                event_type=EventType.SHIFT_START,
                time=part.start,
                agent_group=group.name,
                agent=info.name,
                payload={"type": part.type},
            )
            yield self._wait_until(part.end)
            info.agent.on_shift = False
            self._event_bus.publish(
                event_type=EventType.SHIFT_END,
                time=part.end,
                agent_group=group.name,
                agent=info.name,
            )
