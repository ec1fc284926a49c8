"""Builds every record of a call-center model from a validated configuration."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from ccsim.errors import ConfigurationError, CreationError, CreationStage
from ccsim.streams import RandomStreams

from .agents import AgentGroupManager
from .calendar import ModelContext
from .factories import CallFactory
from .router import RouterManager
from .sources import ArrivalProcessManager, CallSourceManager, DialerManager
from .spec import CallCenterSpec


logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S")


class CallCenter:
    """Fully built model; owned by exactly one simulation run."""

    def __init__(
        self,
        *,
        spec: CallCenterSpec,
        context: ModelContext,
        streams: RandomStreams,
        call_factories: Sequence[CallFactory],
        arrival_processes: Sequence[ArrivalProcessManager],
        dialers: Sequence[DialerManager],
        agent_groups: Sequence[AgentGroupManager],
        router: RouterManager,
    ) -> None:
        self.spec = spec
        self.context = context
        self.streams = streams
        self.call_factories = tuple(call_factories)
        self.arrival_processes = tuple(arrival_processes)
        self.dialers = tuple(dialers)
        self.agent_groups = tuple(agent_groups)
        self.router = router

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def call_sources(self) -> tuple[CallSourceManager, ...]:
        return (*self.arrival_processes, *self.dialers)

    def call_factory(self, name: str) -> CallFactory:
        for factory in self.call_factories:
            if factory.name == name:
                return factory
        raise KeyError(name)


def _build_stage(
    stage: CreationStage,
    label: str,
    items: Sequence[S],
    build: Callable[[int, S], T],
) -> list[T]:
    built: list[T] = []
    for idx, item in enumerate(items):
        try:
            built.append(build(idx, item))
        except CreationError:
            raise
        except ConfigurationError as exc:
            name = getattr(item, "name", None)
            raise CreationError(stage, f"cannot create {label} {idx} ('{name}')", exc) from exc
    return built


def build_call_center(spec: CallCenterSpec, streams: RandomStreams | None = None) -> CallCenter:
    """Materialize ``spec`` into a :class:`CallCenter`.

    Any stage failure is raised as ``CreationError(CALL_CENTER)`` whose cause
    is the stage's own ``CreationError``, itself caused by the offending
    ``ConfigurationError``.
    """
    try:
        return _build(spec, streams)
    except CreationError as exc:
        logger.error("cannot build call center '%s': %s", spec.name, exc)
        raise CreationError(
            CreationStage.CALL_CENTER,
            f"cannot build call center '{spec.name}'",
            exc,
        ) from exc


def _build(spec: CallCenterSpec, streams: RandomStreams | None) -> CallCenter:
    try:
        ctx = ModelContext(spec.calendar)
    except ConfigurationError as exc:
        raise CreationError(CreationStage.CALL_CENTER, "invalid calendar", exc) from exc

    if streams is None:
        streams = RandomStreams(spec.sim.seed)
    streams.create_streams(
        num_agent_groups=len(spec.agent_groups),
        num_arrival_processes=len(spec.arrival_processes),
        num_call_factories=len(spec.call_types),
        num_dialers=len(spec.dialers),
    )

    type_index = {call_type.name: idx for idx, call_type in enumerate(spec.call_types)}

    call_factories = _build_stage(
        CreationStage.CALL_FACTORY,
        "call factory",
        spec.call_types,
        lambda idx, par: CallFactory(par, idx, streams),
    )
    arrival_processes = _build_stage(
        CreationStage.ARRIVAL_PROCESS,
        "arrival process",
        spec.arrival_processes,
        lambda idx, par: ArrivalProcessManager(ctx, par, idx, streams, type_index[par.call_type]),
    )
    dialers = _build_stage(
        CreationStage.DIALER,
        "dialer",
        spec.dialers,
        lambda idx, par: DialerManager(ctx, par, idx, streams, type_index[par.call_type]),
    )
    agent_groups = _build_stage(
        CreationStage.AGENT_GROUP,
        "agent group",
        spec.agent_groups,
        lambda idx, par: AgentGroupManager(ctx, par, idx, streams, spec.named_shifts),
    )
    try:
        router = RouterManager(
            spec.router,
            [call_type.name for call_type in spec.call_types],
            [group.name for group in spec.agent_groups],
        )
    except ConfigurationError as exc:
        raise CreationError(CreationStage.ROUTER, f"cannot create router '{spec.router.policy}'", exc) from exc

    logger.info(
        "call center %s built: %d call types, %d arrival processes, %d dialers, %d agent groups",
        spec.name,
        len(call_factories),
        len(arrival_processes),
        len(dialers),
        len(agent_groups),
    )
    return CallCenter(
        spec=spec,
        context=ctx,
        streams=streams,
        call_factories=call_factories,
        arrival_processes=arrival_processes,
        dialers=dialers,
        agent_groups=agent_groups,
        router=router,
    )
