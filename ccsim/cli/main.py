"""CLI entrypoint for call-center model validation and schedule inspection."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from ccsim.core import ActivationEngine
from ccsim.errors import CreationError
from ccsim.io import ConfigError, ConfigLoader
from ccsim.model import CallCenter, build_call_center
from ccsim.streams import ROLES_BY_KIND, RandomStreams, StreamKind


def _write_jsonl(path: str, rows: list[dict[str, Any]]) -> None:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8") as f:
        for row in rows:
            f.write(json.dumps(row, ensure_ascii=False) + "\n")


def _write_json(path: str, payload: dict[str, Any]) -> None:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def _load_call_center(config: str) -> CallCenter | None:
    try:
        spec = ConfigLoader().load(config)
    except ConfigError as exc:
        print(f"[ERROR] {config}: {exc}")
        return None
    try:
        return build_call_center(spec)
    except CreationError as exc:
        print(f"[ERROR] {config}:\n{exc.describe()}")
        return None


def schedule_report(call_center: CallCenter) -> dict[str, Any]:
    ctx = call_center.context
    sources = []
    for kind, managers in (("arrival_process", call_center.arrival_processes), ("dialer", call_center.dialers)):
        for manager in managers:
            times = manager.get_source_toggle_times()
            sources.append(
                {
                    "kind": kind,
                    "name": manager.name,
                    "call_type": manager.call_type,
                    "enabled": manager.is_source_enabled(),
                    "toggle_times": list(times) if times is not None else None,
                    "active_windows": [list(window) for window in manager.active_windows(ctx)],
                }
            )
    agents = []
    for group in call_center.agent_groups:
        for info in group.agents:
            agents.append(
                {
                    "agent_group": group.name,
                    "name": info.name,
                    "parts": [
                        {"start": part.start, "end": part.end, "type": part.type} for part in info.shift.parts
                    ],
                    "shift_vector": info.shift.shift_vector(ctx),
                }
            )
    return {
        "name": call_center.name,
        "time_unit": ctx.time_unit.value,
        "main_window": list(ctx.main_window()),
        "sources": sources,
        "agents": agents,
    }


def streams_report(streams: RandomStreams | None = None) -> dict[str, Any]:
    report: dict[str, Any] = {
        kind.value: [role.name for role in ROLES_BY_KIND[kind]] for kind in StreamKind
    }
    if streams is not None:
        report["counts"] = {kind.value: streams.count(kind) for kind in StreamKind}
        report["total_streams"] = len(streams)
    return report


def cmd_validate(args: argparse.Namespace) -> int:
    call_center = _load_call_center(args.config)
    if call_center is None:
        return 1
    print("[OK] config validation passed")
    return 0


def cmd_schedule(args: argparse.Namespace) -> int:
    call_center = _load_call_center(args.config)
    if call_center is None:
        return 1
    report = schedule_report(call_center)
    if args.out:
        _write_json(args.out, report)
        print(f"[OK] schedule written to {args.out}")
    else:
        print(json.dumps(report, ensure_ascii=False, indent=2))
    return 0


def cmd_streams(args: argparse.Namespace) -> int:
    streams = None
    if args.config:
        call_center = _load_call_center(args.config)
        if call_center is None:
            return 1
        streams = call_center.streams
    print(json.dumps(streams_report(streams), ensure_ascii=False, indent=2))
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    call_center = _load_call_center(args.config)
    if call_center is None:
        return 1
    engine = ActivationEngine()
    engine.build(call_center)
    if args.until is not None and args.until <= engine.now:
        print(f"[ERROR] --until must be > {engine.now:g} (replay start) when provided")
        return 1
    engine.run(until=args.until)

    events = [event.model_dump(mode="json") for event in engine.events]
    events_out = args.events_out or "artifacts/events.jsonl"
    _write_jsonl(events_out, events)
    print(f"[OK] activation replay completed, events={len(events)}, now={engine.now:.3f}, out={events_out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ccsim", description="Call-center model CLI")
    parser.add_argument("--log-level", default="WARNING", help="logging level (DEBUG, INFO, ...)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="validate config file and build the model")
    validate_parser.add_argument("-c", "--config", required=True, help="path to config YAML/JSON")
    validate_parser.set_defaults(func=cmd_validate)

    schedule_parser = subparsers.add_parser("schedule", help="print source toggle times and agent shifts")
    schedule_parser.add_argument("-c", "--config", required=True, help="path to config YAML/JSON")
    schedule_parser.add_argument("--out", default=None, help="path to write schedule JSON")
    schedule_parser.set_defaults(func=cmd_schedule)

    streams_parser = subparsers.add_parser("streams", help="list random stream roles per entity kind")
    streams_parser.add_argument("-c", "--config", default=None, help="optional config to count streams for")
    streams_parser.set_defaults(func=cmd_streams)

    run_parser = subparsers.add_parser("run", help="replay source activations and agent shifts")
    run_parser.add_argument("-c", "--config", required=True, help="path to config YAML/JSON")
    run_parser.add_argument("--until", type=float, default=None, help="override replay horizon")
    run_parser.add_argument("--events-out", default=None, help="path to write JSONL events")
    run_parser.set_defaults(func=cmd_run)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
