from __future__ import annotations

import pickle

import pytest

from ccsim.errors import ConfigurationError, CreationError, CreationStage


@pytest.mark.parametrize("stage", list(CreationStage))
def test_no_argument_form(stage: CreationStage) -> None:
    error = CreationError(stage)
    assert error.stage == stage
    assert error.message is None
    assert error.cause is None
    assert str(error) == f"cannot create {stage.label}"


@pytest.mark.parametrize("stage", list(CreationStage))
def test_message_form(stage: CreationStage) -> None:
    error = CreationError(stage, "bad thing")
    assert error.message == "bad thing"
    assert error.cause is None
    assert "bad thing" in str(error)


@pytest.mark.parametrize("stage", list(CreationStage))
def test_message_and_cause_form(stage: CreationStage) -> None:
    cause = ConfigurationError("interval 2 overlaps interval 1")
    error = CreationError(stage, "cannot build", cause)
    assert error.cause is cause
    assert error.__cause__ is cause
    assert str(error).endswith("cannot build")


@pytest.mark.parametrize("stage", list(CreationStage))
def test_cause_only_form(stage: CreationStage) -> None:
    cause = ValueError("inner")
    error = CreationError(stage, cause=cause)
    assert error.cause is cause
    assert error.message is None
    assert "inner" in str(error)


def test_stage_accepts_string_value() -> None:
    assert CreationError("dialer").stage is CreationStage.DIALER


def test_exactly_six_stages() -> None:
    assert {stage.name for stage in CreationStage} == {
        "AGENT_GROUP",
        "ARRIVAL_PROCESS",
        "CALL_CENTER",
        "CALL_FACTORY",
        "DIALER",
        "ROUTER",
    }


def test_describe_renders_full_chain() -> None:
    innermost = ConfigurationError("time interval 1 [5, 15) overlaps time interval 0 [0, 10)")
    middle = CreationError(CreationStage.ARRIVAL_PROCESS, "cannot create arrival process 0 ('ap')", innermost)
    outer = CreationError(CreationStage.CALL_CENTER, "cannot build call center 'cc'", middle)
    lines = outer.describe().splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("CreationError: cannot create call center")
    assert "arrival process" in lines[1]
    assert lines[2].strip().startswith("caused by ConfigurationError")
    assert "[5, 15)" in lines[2]


def test_configuration_error_is_value_error() -> None:
    assert issubclass(ConfigurationError, ValueError)


@pytest.mark.parametrize(
    "error",
    [
        CreationError(CreationStage.DIALER),
        CreationError(CreationStage.ROUTER, "bad"),
        CreationError(CreationStage.AGENT_GROUP, "bad shift", ConfigurationError("overlap")),
        CreationError(CreationStage.CALL_FACTORY, cause=ValueError("inner")),
    ],
)
def test_error_survives_pickling(error: CreationError) -> None:
    restored = pickle.loads(pickle.dumps(error))
    assert type(restored) is CreationError
    assert restored.stage is error.stage
    assert restored.message == error.message
    assert str(restored) == str(error)
    if error.cause is None:
        assert restored.cause is None
    else:
        assert type(restored.cause) is type(error.cause)
        assert restored.__cause__ is restored.cause


def test_pickled_chain_keeps_description() -> None:
    inner = CreationError(CreationStage.ARRIVAL_PROCESS, "ap", ConfigurationError("overlap"))
    outer = CreationError(CreationStage.CALL_CENTER, "cc", inner)
    assert pickle.loads(pickle.dumps(outer)).describe() == outer.describe()
