from __future__ import annotations

import json
from pathlib import Path

from ccsim.cli.main import main


def test_cli_validate_ok(examples_dir: Path, capsys) -> None:
    code = main(["validate", "-c", str(examples_dir / "blend_basic.yaml")])
    assert code == 0
    assert "[OK]" in capsys.readouterr().out


def test_cli_validate_prints_cause_chain(examples_dir: Path, capsys) -> None:
    code = main(["validate", "-c", str(examples_dir / "overlapping_toggles.yaml")])
    assert code == 1
    out = capsys.readouterr().out
    assert "[ERROR]" in out
    assert "caused by CreationError: cannot create arrival process" in out
    assert "caused by ConfigurationError" in out


def test_cli_validate_missing_file(tmp_path: Path, capsys) -> None:
    code = main(["validate", "-c", str(tmp_path / "missing.yaml")])
    assert code == 1
    assert "config file not found" in capsys.readouterr().out


def test_cli_schedule_writes_report(examples_dir: Path, tmp_path: Path) -> None:
    out = tmp_path / "schedule.json"
    code = main(["schedule", "-c", str(examples_dir / "blend_basic.yaml"), "--out", str(out)])
    assert code == 0
    report = json.loads(out.read_text(encoding="utf-8"))
    sources = {source["name"]: source for source in report["sources"]}
    assert sources["support-arrivals"]["toggle_times"] == [480, 570, 600, 720]
    assert sources["sales-arrivals"]["toggle_times"] is None
    assert sources["sales-arrivals"]["active_windows"] == [[480, 720]]
    assert sources["survey-dialer"]["active_windows"] == []
    assert report["time_unit"] == "minute"


def test_cli_streams_lists_roles(capsys) -> None:
    code = main(["streams"])
    assert code == 0
    report = json.loads(capsys.readouterr().out)
    assert report["arrival_process"] == ["INTERARRIVAL", "RATES"]
    assert report["dialer"] == ["DIALDELAY", "REACHTEST"]
    assert "counts" not in report


def test_cli_streams_counts_for_config(examples_dir: Path, capsys) -> None:
    code = main(["streams", "-c", str(examples_dir / "blend_basic.yaml")])
    assert code == 0
    report = json.loads(capsys.readouterr().out)
    assert report["counts"]["call_factory"] == 3
    assert report["counts"]["dialer"] == 2
    assert report["total_streams"] == 1 * 2 + 2 * 2 + 3 * 3 + 3 * 4 + 2 * 2


def test_cli_run_writes_events(examples_dir: Path, tmp_path: Path) -> None:
    events_out = tmp_path / "events.jsonl"
    code = main(["run", "-c", str(examples_dir / "blend_basic.yaml"), "--events-out", str(events_out)])
    assert code == 0
    lines = events_out.read_text(encoding="utf-8").splitlines()
    assert lines
    assert json.loads(lines[0])["seq"] == 0


def test_cli_run_rejects_bad_horizon(examples_dir: Path) -> None:
    code = main(["run", "-c", str(examples_dir / "blend_basic.yaml"), "--until", "0"])
    assert code == 1


def test_cli_run_accepts_horizon_after_negative_start(payload: dict, tmp_path: Path, capsys) -> None:
    payload["arrival_processes"][0]["toggle_intervals"] = [{"start": -10, "end": 10}]
    config = tmp_path / "early.json"
    config.write_text(json.dumps(payload), encoding="utf-8")
    events_out = tmp_path / "events.jsonl"

    code = main(["run", "-c", str(config), "--until", "-5", "--events-out", str(events_out)])
    assert code == 0
    events = [json.loads(line) for line in events_out.read_text(encoding="utf-8").splitlines()]
    assert [(e["type"], e["time"]) for e in events] == [("SourceStart", -10)]

    assert main(["run", "-c", str(config), "--until", "-10"]) == 1
    assert "replay start" in capsys.readouterr().out
