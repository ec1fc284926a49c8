"""Simulation event definitions."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class EventType(str, Enum):
    SOURCE_START = "SourceStart"
    SOURCE_STOP = "SourceStop"
    SHIFT_START = "ShiftStart"
    SHIFT_END = "ShiftEnd"
    PERIOD_CHANGE = "PeriodChange"


class SimEvent(BaseModel):
    """Normalized event envelope for tracing."""

    model_config = ConfigDict(extra="forbid")

    event_id: str
    seq: int = Field(ge=0)
    time: float
    type: EventType
    source: Optional[str] = None
    agent_group: Optional[str] = None
    agent: Optional[str] = None
    payload: dict[str, Any] = Field(default_factory=dict)

    def to_json(self) -> str:
        return json.dumps(self.model_dump(mode="json"), ensure_ascii=False)
