from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from ccsim.io import ConfigError, ConfigLoader
from ccsim.model import CallCenterSpec


def _write_yaml(path: Path, payload: dict[str, Any]) -> None:
    path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")


def test_load_example(examples_dir: Path) -> None:
    spec = ConfigLoader().load(str(examples_dir / "blend_basic.yaml"))
    assert spec.name == "blend-basic"
    assert [t.name for t in spec.inbound_types] == ["sales", "support"]
    assert [t.name for t in spec.outbound_types] == ["survey"]


def test_load_raises_when_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="config file not found"):
        ConfigLoader().load(str(tmp_path / "missing.yaml"))


def test_load_raises_on_invalid_yaml_syntax(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("version: [", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid config syntax"):
        ConfigLoader().load(str(path))


def test_load_raises_on_invalid_json_syntax(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text('{"version": "0.2",}', encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid config syntax"):
        ConfigLoader().load(str(path))


def test_load_raises_when_root_is_not_object(tmp_path: Path) -> None:
    path = tmp_path / "list_root.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="config root must be object"):
        ConfigLoader().load(str(path))


def test_schema_rejects_unknown_field(payload: dict[str, Any]) -> None:
    payload["arrival_processes"][0]["toggle_times"] = [0, 10]
    with pytest.raises(ConfigError, match="schema validation failed"):
        ConfigLoader().load_data(payload)


def test_schema_rejects_probability_out_of_range(payload: dict[str, Any]) -> None:
    payload["dialers"][0]["prob_reach"] = 1.5
    with pytest.raises(ConfigError, match="schema validation failed"):
        ConfigLoader().load_data(payload)


def test_unsupported_version(payload: dict[str, Any]) -> None:
    payload["version"] = "9.9"
    with pytest.raises(ConfigError, match="unsupported config version"):
        ConfigLoader().load_data(payload)


@pytest.mark.parametrize(
    ("mutate", "match"),
    [
        (lambda p: p["call_types"].append({"name": "in0"}), "duplicate call_types.name"),
        (lambda p: p["arrival_processes"][0].update(call_type="nope"), "unknown call type"),
        (lambda p: p["arrival_processes"][0].update(call_type="out0"), "inbound call type"),
        (lambda p: p["dialers"][0].update(call_type="in0"), "outbound call type"),
        (lambda p: p["dialers"][0].update(name="ap0"), "shared by arrival processes and dialers"),
        (
            lambda p: p["agent_groups"][0]["agents"].append(p["agent_groups"][0]["agents"][0]),
            "duplicate agent names",
        ),
    ],
)
def test_semantic_validation(payload: dict[str, Any], mutate, match: str) -> None:
    mutate(payload)
    with pytest.raises(ConfigError, match=match):
        ConfigLoader().load_data(payload)


def test_v01_payload_is_migrated(payload: dict[str, Any]) -> None:
    payload["version"] = "0.1"
    payload["router"] = "single_fifo"
    source = payload["arrival_processes"][0]
    source.pop("toggle_intervals")
    source["toggle_times"] = [0, 10, 20, 30]
    spec = ConfigLoader().load_data(payload)
    assert spec.version == "0.2"
    assert spec.router.policy == "single_fifo"
    intervals = spec.arrival_processes[0].toggle_intervals
    assert [(i.start, i.end) for i in intervals] == [(0, 10), (20, 30)]


def test_v01_odd_toggle_times_rejected(payload: dict[str, Any]) -> None:
    payload["version"] = "0.1"
    source = payload["arrival_processes"][0]
    source.pop("toggle_intervals")
    source["toggle_times"] = [0, 10, 20]
    with pytest.raises(ConfigError, match="even length"):
        ConfigLoader().load_data(payload)


@pytest.mark.parametrize("suffix", [".yaml", ".yml", ".json"])
def test_save_round_trips(tmp_path: Path, payload: dict[str, Any], suffix: str) -> None:
    loader = ConfigLoader()
    spec = loader.load_data(payload)
    output = tmp_path / f"out{suffix}"
    loader.save(spec, str(output))
    text = output.read_text(encoding="utf-8")
    parsed = yaml.safe_load(text) if suffix != ".json" else json.loads(text)
    assert parsed["version"] == "0.2"
    assert loader.load(str(output)) == spec


def test_validate_reports_issues(tmp_path: Path, payload: dict[str, Any]) -> None:
    loader = ConfigLoader()
    good = tmp_path / "ok.yaml"
    _write_yaml(good, payload)
    assert loader.validate(str(good)) == []
    assert loader.validate(loader.load(str(good))) == []
    assert isinstance(loader.load(str(good)), CallCenterSpec)

    payload["version"] = "7"
    bad = tmp_path / "bad.yaml"
    _write_yaml(bad, payload)
    issues = loader.validate(str(bad))
    assert len(issues) == 1
    assert issues[0].path == str(bad)
