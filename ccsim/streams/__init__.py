"""Random stream exports."""

from .registry import RandomStreams, StreamKey
from .types import (
    ROLES_BY_KIND,
    AgentGroupStreamType,
    ArrivalProcessStreamType,
    CallFactoryStreamType,
    CallFactoryStreamType2,
    DialerStreamType,
    StreamKind,
    kind_of,
)

__all__ = [
    "AgentGroupStreamType",
    "ArrivalProcessStreamType",
    "CallFactoryStreamType",
    "CallFactoryStreamType2",
    "DialerStreamType",
    "ROLES_BY_KIND",
    "RandomStreams",
    "StreamKey",
    "StreamKind",
    "kind_of",
]
