"""Configuration domain models and semantic validation."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


TimeValue = Union[float, str]


class TimeUnit(str, Enum):
    """Default time unit of the simulation clock."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"

    @property
    def seconds(self) -> float:
        return {"second": 1.0, "minute": 60.0, "hour": 3600.0}[self.value]


class CallDirection(str, Enum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"


class CalendarSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    time_unit: TimeUnit = TimeUnit.SECOND
    period_start: TimeValue = 0.0
    period_duration: TimeValue
    num_periods: int = Field(default=1, ge=1)


class TimeIntervalSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    start: TimeValue
    end: TimeValue


class ShiftPartSpec(TimeIntervalSpec):
    type: str = "Working"


class ScheduleShiftSpec(BaseModel):
    """Shift parts, or an ``xref`` to another named shift whose parts are reused.

    Without ``num_agents`` and ``probability``, both are estimated from
    ``num_agents_data`` when given.
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    parts: Optional[list[ShiftPartSpec]] = None
    xref: Optional[str] = None
    num_agents: Optional[int] = Field(default=None, ge=0)
    probability: Optional[float] = Field(default=None, ge=0, le=1)
    num_agents_data: Optional[list[int]] = None

    @model_validator(mode="after")
    def validate_shift(self) -> "ScheduleShiftSpec":
        if self.parts is None and self.xref is None:
            raise ValueError("shift requires parts or xref")
        if self.parts is not None and not self.parts:
            raise ValueError("shift parts must not be empty")
        if self.num_agents_data is not None:
            if not self.num_agents_data:
                raise ValueError("num_agents_data must not be empty")
            if any(value < 0 for value in self.num_agents_data):
                raise ValueError("num_agents_data must not contain negative values")
        return self


class AgentSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    shift: ScheduleShiftSpec
    properties: dict[str, Any] = Field(default_factory=dict)


class AgentGroupSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    agents: list[AgentSpec] = Field(default_factory=list)
    prob_disconnect: float = Field(default=0.0, ge=0, le=1)
    properties: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_agents(self) -> "AgentGroupSpec":
        names = [agent.name for agent in self.agents]
        if len(names) != len(set(names)):
            raise ValueError(f"agent group '{self.name}' contains duplicate agent names")
        return self


class CallTypeSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    direction: CallDirection = CallDirection.INBOUND
    prob_balk: float = Field(default=0.0, ge=0, le=1)
    prob_transfer: float = Field(default=0.0, ge=0, le=1)
    params: dict[str, Any] = Field(default_factory=dict)
    properties: dict[str, Any] = Field(default_factory=dict)


class CallSourceSpec(BaseModel):
    """Settings shared by arrival processes and dialers."""

    model_config = ConfigDict(extra="forbid")

    name: str
    enabled: bool = True
    toggle_intervals: Optional[list[TimeIntervalSpec]] = None
    properties: dict[str, Any] = Field(default_factory=dict)


class ArrivalProcessSpec(CallSourceSpec):
    call_type: str
    kind: str = "poisson"
    params: dict[str, Any] = Field(default_factory=dict)


class DialerSpec(CallSourceSpec):
    call_type: str
    prob_reach: float = Field(default=1.0, ge=0, le=1)
    params: dict[str, Any] = Field(default_factory=dict)


class RouterSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    policy: str = "queue_priority"
    params: dict[str, Any] = Field(default_factory=dict)


class SimSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    seed: int = 42
    duration: Optional[float] = Field(default=None, gt=0)


class CallCenterSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    version: str
    name: str = "call-center"
    calendar: CalendarSpec
    call_types: list[CallTypeSpec] = Field(min_length=1)
    arrival_processes: list[ArrivalProcessSpec] = Field(default_factory=list)
    dialers: list[DialerSpec] = Field(default_factory=list)
    agent_groups: list[AgentGroupSpec] = Field(default_factory=list)
    router: RouterSpec = Field(default_factory=RouterSpec)
    sim: SimSpec = Field(default_factory=SimSpec)

    @model_validator(mode="after")
    def validate_semantics(self) -> "CallCenterSpec":
        for label, items in (
            ("call_types", self.call_types),
            ("arrival_processes", self.arrival_processes),
            ("dialers", self.dialers),
            ("agent_groups", self.agent_groups),
        ):
            names = [item.name for item in items]
            if len(names) != len(set(names)):
                raise ValueError(f"duplicate {label}.name")
        shifts: dict[str, ScheduleShiftSpec] = {}
        for shift in self._shifts():
            if shift.name is None:
                continue
            if shift.name in shifts:
                raise ValueError(f"duplicate shift name '{shift.name}'")
            shifts[shift.name] = shift
        for shift in self._shifts():
            if shift.xref is None or shift.parts is not None:
                continue
            target = shifts.get(shift.xref)
            if target is None or target.parts is None:
                raise ValueError(f"shift xref '{shift.xref}' does not point to a shift with parts")
        shared = {p.name for p in self.arrival_processes} & {d.name for d in self.dialers}
        if shared:
            raise ValueError(f"call source names shared by arrival processes and dialers: {sorted(shared)}")

        directions = {call_type.name: call_type.direction for call_type in self.call_types}
        for process in self.arrival_processes:
            direction = directions.get(process.call_type)
            if direction is None:
                raise ValueError(
                    f"arrival process '{process.name}' references unknown call type '{process.call_type}'"
                )
            if direction != CallDirection.INBOUND:
                raise ValueError(
                    f"arrival process '{process.name}' must produce an inbound call type, "
                    f"got '{process.call_type}'"
                )
        for dialer in self.dialers:
            direction = directions.get(dialer.call_type)
            if direction is None:
                raise ValueError(f"dialer '{dialer.name}' references unknown call type '{dialer.call_type}'")
            if direction != CallDirection.OUTBOUND:
                raise ValueError(
                    f"dialer '{dialer.name}' must produce an outbound call type, got '{dialer.call_type}'"
                )
        return self

    def _shifts(self) -> list[ScheduleShiftSpec]:
        return [agent.shift for group in self.agent_groups for agent in group.agents]

    @property
    def named_shifts(self) -> dict[str, ScheduleShiftSpec]:
        return {shift.name: shift for shift in self._shifts() if shift.name is not None}

    @property
    def inbound_types(self) -> list[CallTypeSpec]:
        return [t for t in self.call_types if t.direction == CallDirection.INBOUND]

    @property
    def outbound_types(self) -> list[CallTypeSpec]:
        return [t for t in self.call_types if t.direction == CallDirection.OUTBOUND]
