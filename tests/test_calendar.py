from __future__ import annotations

import pytest

from ccsim.errors import ConfigurationError
from ccsim.model import CalendarSpec, ModelContext


def _ctx(unit: str = "second", **overrides) -> ModelContext:
    params = {"time_unit": unit, "period_start": 0, "period_duration": 3600, "num_periods": 3}
    params.update(overrides)
    return ModelContext(CalendarSpec(**params))


@pytest.mark.parametrize(
    ("unit", "value", "expected"),
    [
        ("second", "PT1H30M", 5400.0),
        ("minute", "PT1H30M", 90.0),
        ("hour", "PT1H30M", 1.5),
        ("hour", "P1DT2H", 26.0),
        ("minute", "PT45S", 0.75),
        ("minute", "08:15", 495.0),
        ("second", "00:01:30.5", 90.5),
        ("second", 12, 12.0),
        ("second", "12.5", 12.5),
    ],
)
def test_get_time_converts_to_default_unit(unit: str, value, expected: float) -> None:
    assert _ctx(unit).get_time(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", ["later", "P", "PT", "P1DT", "25:61", "08:60", "nan", "inf", True, None])
def test_get_time_rejects_invalid_values(value) -> None:
    with pytest.raises(ConfigurationError):
        _ctx().get_time(value)


def test_period_references() -> None:
    ctx = _ctx("minute", period_start="08:00", period_duration="PT30M", num_periods=4)
    assert ctx.period_start == 480
    assert ctx.get_time("period:0") == 480
    assert ctx.get_time("period_end:3") == 600
    assert ctx.main_window() == (480, 600)
    with pytest.raises(ConfigurationError, match="out of range"):
        ctx.get_time("period:4")


def test_main_period_lookup() -> None:
    ctx = _ctx()
    assert ctx.main_period(-1) == -1
    assert ctx.main_period(0) == 0
    assert ctx.main_period(3599.9) == 0
    assert ctx.main_period(3600) == 1
    assert ctx.main_period(99999) == 3
    assert ctx.is_period_starting_time(7200)
    assert not ctx.is_period_starting_time(7201)


def test_calendar_rejects_non_positive_duration_and_period_refs() -> None:
    with pytest.raises(ConfigurationError, match="period duration"):
        _ctx(period_duration=0)
    with pytest.raises(ConfigurationError, match="not allowed"):
        _ctx(period_start="period:1")
