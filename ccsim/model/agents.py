"""Agents, their work shifts and the agent groups holding them."""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Optional

from scipy import stats

from ccsim.errors import ConfigurationError, CreationError, CreationStage
from ccsim.streams import AgentGroupStreamType, RandomStreams

from .calendar import ModelContext
from .interval import ShiftPart, check_intervals, create_shift_parts, sorted_intervals
from .named import NamedInfo
from .spec import AgentGroupSpec, AgentSpec, ScheduleShiftSpec


logger = logging.getLogger(__name__)

_MLE_SEARCH_LIMIT = 10_000


def _binomial_log_likelihood(values: Sequence[int], n: int, p: float) -> float:
    return float(stats.binom.logpmf(values, n, p).sum())


def estimate_binomial(observations: Sequence[int]) -> tuple[int, float]:
    """Maximum-likelihood ``(n, p)`` of a binomial sample with both parameters unknown.

    The likelihood is profiled over ``n`` with ``p = mean / n``, starting at
    the largest observation and stopping at the first non-increase.
    """
    values = [int(value) for value in observations]
    if not values:
        raise ConfigurationError("cannot estimate the number of agents from an empty sample")
    if any(value < 0 for value in values):
        raise ConfigurationError("observed numbers of agents must not be negative")
    mean = sum(values) / len(values)
    if mean == 0:
        return 0, 1.0
    n = max(values)
    best = _binomial_log_likelihood(values, n, mean / n)
    limit = n + _MLE_SEARCH_LIMIT
    while n < limit:
        candidate = _binomial_log_likelihood(values, n + 1, mean / (n + 1))
        if candidate <= best:
            break
        n += 1
        best = candidate
    return n, mean / n


@dataclass(slots=True)
class Agent:
    """Simulated agent handle; its state belongs to the simulation engine."""

    name: str
    on_shift: bool = False

    def init(self) -> None:
        self.on_shift = False


class ScheduleShift:
    """Ordered, non-overlapping shift parts with the agents scheduled on them."""

    def __init__(self, parts: Sequence[ShiftPart], num_agents: int = 0, probability: float = 1.0) -> None:
        check_intervals(parts)
        if num_agents < 0:
            raise ConfigurationError("the number of agents must not be negative")
        self._parts = tuple(sorted_intervals(parts))
        self._num_agents = num_agents
        self.agent_probability = probability

    @classmethod
    def from_spec(
        cls,
        ctx: ModelContext,
        spec: ScheduleShiftSpec,
        shifts: Optional[Mapping[str, ScheduleShiftSpec]] = None,
    ) -> "ScheduleShift":
        """Build a shift, resolving ``xref`` against ``shifts`` (named shifts of the model)."""
        part_specs = spec.parts
        if part_specs is None:
            target = (shifts or {}).get(spec.xref or "")
            if target is None or target.parts is None:
                raise ConfigurationError(f"the xref '{spec.xref}' of the shift does not point to another shift")
            part_specs = target.parts
        parts = create_shift_parts(ctx, part_specs)
        if spec.num_agents is not None or spec.probability is not None:
            num_agents = spec.num_agents if spec.num_agents is not None else 0
            probability = spec.probability if spec.probability is not None else 1.0
        elif spec.num_agents_data is not None:
            num_agents, probability = estimate_binomial(spec.num_agents_data)
            logger.debug("estimated %d agents with presence probability %.4f", num_agents, probability)
        else:
            num_agents, probability = 0, 1.0
        return cls(parts, num_agents, probability)

    @property
    def parts(self) -> tuple[ShiftPart, ...]:
        return self._parts

    @property
    def num_parts(self) -> int:
        return len(self._parts)

    @property
    def num_agents(self) -> int:
        return self._num_agents

    @num_agents.setter
    def num_agents(self, value: int) -> None:
        if value < 0:
            raise ConfigurationError("the number of agents must not be negative")
        self._num_agents = value

    @property
    def agent_probability(self) -> float:
        return self._prob

    @agent_probability.setter
    def agent_probability(self, value: float) -> None:
        if not 0.0 <= value <= 1.0:
            raise ConfigurationError(f"agent presence probability must be in [0, 1], got {value}")
        self._prob = value

    def working_parts(self) -> list[ShiftPart]:
        return [part for part in self._parts if part.is_working]

    def is_working_at(self, time: float) -> bool:
        return any(part.contains(time) for part in self._parts if part.is_working)

    def shift_vector(self, ctx: ModelContext) -> list[bool]:
        """Per main period, whether agents work at any time during it."""
        vector = [False] * ctx.num_periods
        for part in self.working_parts():
            first = max(ctx.main_period(part.start), 0)
            last = ctx.main_period(part.end)
            if ctx.is_period_starting_time(part.end):
                last -= 1
            last = min(last, ctx.num_periods - 1)
            for period in range(first, last + 1):
                vector[period] = True
        return vector


class AgentInfo(NamedInfo):
    """An agent handle together with the shift it works."""

    def __init__(
        self,
        ctx: ModelContext,
        params: AgentSpec,
        shifts: Optional[Mapping[str, ScheduleShiftSpec]] = None,
    ) -> None:
        super().__init__(params.name, params.properties)
        try:
            self._shift = ScheduleShift.from_spec(ctx, params.shift, shifts)
        except ConfigurationError as exc:
            raise CreationError(
                CreationStage.AGENT_GROUP, f"agent '{params.name}' has an invalid shift", exc
            ) from exc
        self._agent = Agent(name=params.name)

    @property
    def agent(self) -> Agent:
        return self._agent

    @property
    def shift(self) -> ScheduleShift:
        return self._shift


class AgentGroupManager(NamedInfo):
    """Agent group with one information record per agent."""

    def __init__(
        self,
        ctx: ModelContext,
        params: AgentGroupSpec,
        index: int,
        streams: RandomStreams,
        shifts: Optional[Mapping[str, ScheduleShiftSpec]] = None,
    ) -> None:
        super().__init__(params.name, params.properties)
        self.index = index
        self.prob_disconnect = params.prob_disconnect
        self._streams = streams
        agents: list[AgentInfo] = []
        for idx, agent_params in enumerate(params.agents):
            try:
                agents.append(AgentInfo(ctx, agent_params, shifts))
            except CreationError as exc:
                raise CreationError(
                    CreationStage.AGENT_GROUP,
                    f"agent group '{params.name}': cannot create the agent with index {idx} "
                    f"('{agent_params.name}')",
                    exc,
                ) from exc
        self._agents = tuple(agents)
        logger.debug("agent group %s built with %d agents", self.name, len(self._agents))

    @property
    def agents(self) -> tuple[AgentInfo, ...]:
        return self._agents

    @property
    def num_agents(self) -> int:
        return len(self._agents)

    def agent(self, index: int) -> AgentInfo:
        return self._agents[index]

    def find(self, name: str) -> Optional[AgentInfo]:
        for info in self._agents:
            if info.name == name:
                return info
        return None

    def stream(self, role: AgentGroupStreamType) -> random.Random:
        return self._streams.agent_group_stream(self.index, role)

    def disconnect_test(self) -> bool:
        """Draw whether an agent leaving this group disconnects immediately."""
        return self.stream(AgentGroupStreamType.DISCONNECTTEST).random() < self.prob_disconnect
