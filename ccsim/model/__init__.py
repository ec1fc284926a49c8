"""Model package exports."""

from .agents import Agent, AgentGroupManager, AgentInfo, ScheduleShift, estimate_binomial
from .calendar import ModelContext
from .call_center import CallCenter, build_call_center
from .factories import CallFactory
from .interval import (
    ShiftPart,
    TimeInterval,
    check_intervals,
    create_intervals,
    create_shift_parts,
)
from .router import RouterManager, available_router_policies, register_router_policy
from .sources import (
    ArrivalProcessManager,
    CallSourceManager,
    DialerManager,
    flatten_windows,
    validate_toggle_times,
)
from .spec import (
    AgentGroupSpec,
    AgentSpec,
    ArrivalProcessSpec,
    CalendarSpec,
    CallCenterSpec,
    CallDirection,
    CallSourceSpec,
    CallTypeSpec,
    DialerSpec,
    RouterSpec,
    ScheduleShiftSpec,
    ShiftPartSpec,
    SimSpec,
    TimeIntervalSpec,
    TimeUnit,
)

__all__ = [
    "Agent",
    "AgentGroupManager",
    "AgentGroupSpec",
    "AgentInfo",
    "AgentSpec",
    "ArrivalProcessManager",
    "ArrivalProcessSpec",
    "CalendarSpec",
    "CallCenter",
    "CallCenterSpec",
    "CallDirection",
    "CallFactory",
    "CallSourceManager",
    "CallSourceSpec",
    "CallTypeSpec",
    "DialerManager",
    "DialerSpec",
    "ModelContext",
    "RouterManager",
    "RouterSpec",
    "ScheduleShift",
    "ScheduleShiftSpec",
    "ShiftPart",
    "ShiftPartSpec",
    "SimSpec",
    "TimeInterval",
    "TimeIntervalSpec",
    "TimeUnit",
    "available_router_policies",
    "build_call_center",
    "check_intervals",
    "create_intervals",
    "create_shift_parts",
    "estimate_binomial",
    "flatten_windows",
    "register_router_policy",
    "validate_toggle_times",
]
