"""Base for records identified by a configured name."""

from __future__ import annotations

from typing import Any


class NamedInfo:
    def __init__(self, name: str, properties: dict[str, Any] | None = None) -> None:
        self._name = name
        self._properties = dict(properties or {})

    @property
    def name(self) -> str:
        return self._name

    @property
    def properties(self) -> dict[str, Any]:
        return dict(self._properties)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"
