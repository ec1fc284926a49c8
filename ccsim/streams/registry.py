"""Registry of independent random streams keyed by ``(kind, entity, role)``."""

from __future__ import annotations

import copy
import logging
import random
from collections.abc import Iterator
from enum import Enum

from .types import (
    ROLES_BY_KIND,
    AgentGroupStreamType,
    ArrivalProcessStreamType,
    CallFactoryStreamType,
    CallFactoryStreamType2,
    DialerStreamType,
    StreamKind,
    kind_of,
)


logger = logging.getLogger(__name__)

StreamKey = tuple[StreamKind, int, Enum]


class RandomStreams:
    """One ``random.Random`` per stochastic behavior of every entity.

    Each stream is seeded from the base seed, the replication index and the
    ``(kind, entity index, role)`` key, so the draws of a stream never depend on
    how many other entities or roles exist. Two instances built with the same
    seed and entity counts produce identical draws. Instances are not meant to
    be shared between concurrently running models; use :meth:`copy`.
    """

    def __init__(
        self,
        seed: int = 0,
        *,
        num_agent_groups: int = 0,
        num_arrival_processes: int = 0,
        num_call_factories: int = 0,
        num_dialers: int = 0,
    ) -> None:
        self._seed = seed
        self._replication = 0
        self._counts: dict[StreamKind, int] = {kind: 0 for kind in StreamKind}
        self._streams: dict[StreamKey, random.Random] = {}
        self.create_streams(
            num_agent_groups=num_agent_groups,
            num_arrival_processes=num_arrival_processes,
            num_call_factories=num_call_factories,
            num_dialers=num_dialers,
        )

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def replication(self) -> int:
        return self._replication

    def create_streams(
        self,
        *,
        num_agent_groups: int,
        num_arrival_processes: int,
        num_call_factories: int,
        num_dialers: int,
    ) -> None:
        """Make sure enough streams exist; existing streams are kept untouched."""
        requested = {
            StreamKind.AGENT_GROUP: num_agent_groups,
            StreamKind.ARRIVAL_PROCESS: num_arrival_processes,
            StreamKind.CALL_FACTORY: num_call_factories,
            StreamKind.CALL_FACTORY2: num_call_factories,
            StreamKind.DIALER: num_dialers,
        }
        for kind, count in requested.items():
            if count < 0:
                raise ValueError(f"number of {kind.value} entities must be >= 0")
            for index in range(self._counts[kind], count):
                for role in ROLES_BY_KIND[kind]:
                    key = (kind, index, role)
                    self._streams[key] = random.Random(self._seed_material(key))
            self._counts[kind] = max(self._counts[kind], count)
        logger.debug("random streams allocated: %s", {k.value: v for k, v in self._counts.items()})

    def count(self, kind: StreamKind) -> int:
        return self._counts[StreamKind(kind)]

    def __len__(self) -> int:
        return len(self._streams)

    def keys(self) -> Iterator[StreamKey]:
        return iter(sorted(self._streams, key=lambda key: (key[0].value, key[1], key[2].value)))

    def stream(self, kind: StreamKind, index: int, role: Enum) -> random.Random:
        kind = StreamKind(kind)
        if kind_of(role) != kind:
            raise ValueError(f"stream role {role!r} does not belong to {kind.value}")
        if index < 0 or index >= self._counts[kind]:
            raise IndexError(f"{kind.value} index {index} out of range [0, {self._counts[kind]})")
        return self._streams[(kind, index, role)]

    def agent_group_stream(self, index: int, role: AgentGroupStreamType) -> random.Random:
        return self.stream(StreamKind.AGENT_GROUP, index, role)

    def arrival_process_stream(self, index: int, role: ArrivalProcessStreamType) -> random.Random:
        return self.stream(StreamKind.ARRIVAL_PROCESS, index, role)

    def call_factory_stream(
        self,
        index: int,
        role: CallFactoryStreamType | CallFactoryStreamType2,
    ) -> random.Random:
        return self.stream(kind_of(role), index, role)

    def dialer_stream(self, index: int, role: DialerStreamType) -> random.Random:
        return self.stream(StreamKind.DIALER, index, role)

    def reset_start_stream(self) -> None:
        """Rewind every stream to the start of the first replication."""
        self._replication = 0
        self._reseed()

    def reset_next_substream(self) -> None:
        """Move every stream to the start of the next replication."""
        self._replication += 1
        self._reseed()

    def copy(self) -> "RandomStreams":
        """Independent copy with the same seeds and current stream states."""
        return copy.deepcopy(self)

    def _reseed(self) -> None:
        for key, rng in self._streams.items():
            rng.seed(self._seed_material(key))

    def _seed_material(self, key: StreamKey) -> str:
        kind, index, role = key
        # str seeds are hashed with SHA-512, independent of PYTHONHASHSEED.
        return f"ccsim:{self._seed}:{self._replication}:{kind.value}:{index}:{role.value}"
