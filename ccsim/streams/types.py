"""Roles of the independent random streams, one enum per entity kind.

Adding a member to one of these enums creates a new stream for every entity
of that kind; existing streams keep their seeds since seeds are derived from
the role name, not its position.
"""

from __future__ import annotations

from enum import Enum


class AgentGroupStreamType(str, Enum):
    DISCONNECTTEST = "disconnect_test"
    DISCONNECTTIME = "disconnect_time"


class ArrivalProcessStreamType(str, Enum):
    INTERARRIVAL = "interarrival"
    RATES = "rates"


class CallFactoryStreamType(str, Enum):
    BALKTEST = "balk_test"
    PATIENCE = "patience"
    SERVICE = "service"


class CallFactoryStreamType2(str, Enum):
    VQUEUE = "vqueue"
    PROBTRANSFER = "prob_transfer"
    TRANSFERTIME = "transfer_time"
    HANDOFF = "handoff"


class DialerStreamType(str, Enum):
    DIALDELAY = "dial_delay"
    REACHTEST = "reach_test"


class StreamKind(str, Enum):
    """Entity kind owning a family of streams."""

    AGENT_GROUP = "agent_group"
    ARRIVAL_PROCESS = "arrival_process"
    CALL_FACTORY = "call_factory"
    CALL_FACTORY2 = "call_factory2"
    DIALER = "dialer"


ROLES_BY_KIND: dict[StreamKind, type[Enum]] = {
    StreamKind.AGENT_GROUP: AgentGroupStreamType,
    StreamKind.ARRIVAL_PROCESS: ArrivalProcessStreamType,
    StreamKind.CALL_FACTORY: CallFactoryStreamType,
    StreamKind.CALL_FACTORY2: CallFactoryStreamType2,
    StreamKind.DIALER: DialerStreamType,
}


def kind_of(role: Enum) -> StreamKind:
    for kind, enum_type in ROLES_BY_KIND.items():
        if isinstance(role, enum_type):
            return kind
    raise ValueError(f"unknown stream role {role!r}")
