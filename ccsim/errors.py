"""Error types raised while building a call-center model."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ConfigurationError(ValueError):
    """Malformed or overlapping time interval, or an invalid toggle schedule."""


class CreationStage(str, Enum):
    """Aggregate being built when a creation error occurs."""

    AGENT_GROUP = "agent_group"
    ARRIVAL_PROCESS = "arrival_process"
    CALL_CENTER = "call_center"
    CALL_FACTORY = "call_factory"
    DIALER = "dialer"
    ROUTER = "router"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


class CreationError(Exception):
    """Failure while materializing one stage of the model.

    ``CreationError(stage)``, ``CreationError(stage, message)``,
    ``CreationError(stage, message, cause)`` and ``CreationError(stage, cause=exc)``
    are all accepted. The cause is also linked as ``__cause__`` so that a
    traceback shows the whole chain even when the error is raised without
    ``from``.
    """

    def __init__(
        self,
        stage: CreationStage,
        message: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.stage = CreationStage(stage)
        self.message = message
        self._cause = cause
        if message is not None:
            super().__init__(message)
        else:
            super().__init__()
        if cause is not None:
            self.__cause__ = cause

    @property
    def cause(self) -> Optional[BaseException]:
        return self._cause

    def __reduce__(self) -> tuple:
        return type(self), (self.stage, self.message, self._cause)

    def __str__(self) -> str:
        text = self.message
        if text is None and self._cause is not None:
            text = str(self._cause)
        if not text:
            return f"cannot create {self.stage.label}"
        return f"cannot create {self.stage.label}: {text}"

    def describe(self) -> str:
        """Render the cause chain, outermost first, one line per level."""
        lines: list[str] = []
        current: Optional[BaseException] = self
        seen: set[int] = set()
        depth = 0
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            prefix = "  " * depth + ("caused by " if depth else "")
            lines.append(f"{prefix}{type(current).__name__}: {current}")
            current = current.__cause__ or current.__context__
            depth += 1
        return "\n".join(lines)
