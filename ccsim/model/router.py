"""Router configuration record and routing-policy registry."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from ccsim.errors import ConfigurationError

from .named import NamedInfo
from .spec import RouterSpec


PolicyValidator = Callable[[dict[str, Any], Sequence[str], Sequence[str]], None]


def _check_type_to_group(params: dict[str, Any], call_types: Sequence[str], groups: Sequence[str]) -> None:
    mapping = params.get("type_to_group")
    if mapping is None:
        return
    if not isinstance(mapping, dict):
        raise ConfigurationError("router params.type_to_group must be object")
    known_types = set(call_types)
    known_groups = set(groups)
    for call_type, targets in mapping.items():
        if call_type not in known_types:
            raise ConfigurationError(f"router params.type_to_group references unknown call type '{call_type}'")
        if not isinstance(targets, list):
            raise ConfigurationError(f"router params.type_to_group.{call_type} must be list")
        for group in targets:
            if group not in known_groups:
                raise ConfigurationError(
                    f"router params.type_to_group.{call_type} references unknown agent group '{group}'"
                )


def _no_params(params: dict[str, Any], call_types: Sequence[str], groups: Sequence[str]) -> None:  # noqa: ARG001
    return None


_REGISTRY: dict[str, PolicyValidator] = {
    "queue_priority": _check_type_to_group,
    "agents_preference": _check_type_to_group,
    "longest_waiting_time": _check_type_to_group,
    "single_fifo": _no_params,
}


def register_router_policy(name: str, validator: PolicyValidator) -> None:
    _REGISTRY[name.strip().lower()] = validator


def available_router_policies() -> list[str]:
    return sorted(_REGISTRY)


class RouterManager(NamedInfo):
    """Routing policy selected for the model, with validated parameters."""

    def __init__(self, params: RouterSpec, call_types: Sequence[str], groups: Sequence[str]) -> None:
        super().__init__(params.policy)
        key = params.policy.strip().lower()
        if key not in _REGISTRY:
            raise ConfigurationError(f"unknown router policy {params.policy}")
        _REGISTRY[key](params.params, call_types, groups)
        self.policy = key
        self.params = dict(params.params)
