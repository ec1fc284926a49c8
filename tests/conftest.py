from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest


EXAMPLES = Path(__file__).resolve().parents[1] / "examples"


def base_payload() -> dict[str, Any]:
    return {
        "version": "0.2",
        "name": "unit",
        "calendar": {"time_unit": "second", "period_start": 0, "period_duration": 100, "num_periods": 2},
        "call_types": [
            {"name": "in0", "direction": "inbound"},
            {"name": "out0", "direction": "outbound"},
        ],
        "arrival_processes": [
            {
                "name": "ap0",
                "call_type": "in0",
                "toggle_intervals": [{"start": 0, "end": 10}, {"start": 20, "end": 30}],
            }
        ],
        "dialers": [{"name": "d0", "call_type": "out0"}],
        "agent_groups": [
            {
                "name": "g0",
                "agents": [{"name": "a0", "shift": {"parts": [{"start": 0, "end": 50}]}}],
            }
        ],
        "router": {"policy": "queue_priority", "params": {}},
        "sim": {"seed": 1},
    }


@pytest.fixture
def payload() -> dict[str, Any]:
    return base_payload()


@pytest.fixture
def examples_dir() -> Path:
    return EXAMPLES
