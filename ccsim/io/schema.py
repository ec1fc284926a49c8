"""JSON schema for configuration structure validation."""

from __future__ import annotations

CONFIG_SCHEMA: dict = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Call Center Simulation Config",
    "type": "object",
    "required": ["version", "calendar", "call_types"],
    "properties": {
        "version": {"type": "string"},
        "name": {"type": "string"},
        "calendar": {
            "type": "object",
            "required": ["period_duration"],
            "properties": {
                "time_unit": {"type": "string", "enum": ["second", "minute", "hour"]},
                "period_start": {"$ref": "#/$defs/TimeValue"},
                "period_duration": {"$ref": "#/$defs/TimeValue"},
                "num_periods": {"type": "integer", "minimum": 1},
            },
            "additionalProperties": False,
        },
        "call_types": {
            "type": "array",
            "minItems": 1,
            "items": {"$ref": "#/$defs/CallType"},
        },
        "arrival_processes": {
            "type": "array",
            "items": {"$ref": "#/$defs/ArrivalProcess"},
            "default": [],
        },
        "dialers": {
            "type": "array",
            "items": {"$ref": "#/$defs/Dialer"},
            "default": [],
        },
        "agent_groups": {
            "type": "array",
            "items": {"$ref": "#/$defs/AgentGroup"},
            "default": [],
        },
        "router": {
            "type": "object",
            "properties": {
                "policy": {"type": "string"},
                "params": {"type": "object", "default": {}},
            },
            "additionalProperties": False,
        },
        "sim": {
            "type": "object",
            "properties": {
                "seed": {"type": "integer"},
                "duration": {"type": "number", "exclusiveMinimum": 0},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
    "$defs": {
        "TimeValue": {"type": ["number", "string"]},
        "Probability": {"type": "number", "minimum": 0, "maximum": 1},
        "TimeInterval": {
            "type": "object",
            "required": ["start", "end"],
            "properties": {
                "start": {"$ref": "#/$defs/TimeValue"},
                "end": {"$ref": "#/$defs/TimeValue"},
            },
            "additionalProperties": False,
        },
        "ShiftPart": {
            "type": "object",
            "required": ["start", "end"],
            "properties": {
                "start": {"$ref": "#/$defs/TimeValue"},
                "end": {"$ref": "#/$defs/TimeValue"},
                "type": {"type": "string"},
            },
            "additionalProperties": False,
        },
        "CallType": {
            "type": "object",
            "required": ["name"],
            "properties": {
                "name": {"type": "string"},
                "direction": {"type": "string", "enum": ["inbound", "outbound"]},
                "prob_balk": {"$ref": "#/$defs/Probability"},
                "prob_transfer": {"$ref": "#/$defs/Probability"},
                "params": {"type": "object"},
                "properties": {"type": "object"},
            },
            "additionalProperties": False,
        },
        "ArrivalProcess": {
            "type": "object",
            "required": ["name", "call_type"],
            "properties": {
                "name": {"type": "string"},
                "call_type": {"type": "string"},
                "kind": {"type": "string"},
                "enabled": {"type": "boolean"},
                "toggle_intervals": {"type": "array", "items": {"$ref": "#/$defs/TimeInterval"}},
                "params": {"type": "object"},
                "properties": {"type": "object"},
            },
            "additionalProperties": False,
        },
        "Dialer": {
            "type": "object",
            "required": ["name", "call_type"],
            "properties": {
                "name": {"type": "string"},
                "call_type": {"type": "string"},
                "enabled": {"type": "boolean"},
                "toggle_intervals": {"type": "array", "items": {"$ref": "#/$defs/TimeInterval"}},
                "prob_reach": {"$ref": "#/$defs/Probability"},
                "params": {"type": "object"},
                "properties": {"type": "object"},
            },
            "additionalProperties": False,
        },
        "Agent": {
            "type": "object",
            "required": ["name", "shift"],
            "properties": {
                "name": {"type": "string"},
                "shift": {
                    "type": "object",
                    "anyOf": [{"required": ["parts"]}, {"required": ["xref"]}],
                    "properties": {
                        "name": {"type": "string"},
                        "parts": {
                            "type": "array",
                            "minItems": 1,
                            "items": {"$ref": "#/$defs/ShiftPart"},
                        },
                        "xref": {"type": "string"},
                        "num_agents": {"type": "integer", "minimum": 0},
                        "probability": {"$ref": "#/$defs/Probability"},
                        "num_agents_data": {
                            "type": "array",
                            "minItems": 1,
                            "items": {"type": "integer", "minimum": 0},
                        },
                    },
                    "additionalProperties": False,
                },
                "properties": {"type": "object"},
            },
            "additionalProperties": False,
        },
        "AgentGroup": {
            "type": "object",
            "required": ["name"],
            "properties": {
                "name": {"type": "string"},
                "agents": {"type": "array", "items": {"$ref": "#/$defs/Agent"}},
                "prob_disconnect": {"$ref": "#/$defs/Probability"},
                "properties": {"type": "object"},
            },
            "additionalProperties": False,
        },
    },
}
