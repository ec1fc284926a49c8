"""Call factories: per-call-type parameters and their random streams."""

from __future__ import annotations

import math
import random
from typing import Any

from ccsim.errors import ConfigurationError
from ccsim.streams import CallFactoryStreamType, CallFactoryStreamType2, RandomStreams

from .named import NamedInfo
from .spec import CallDirection, CallTypeSpec


_POSITIVE_PARAMS = ("patience_mean", "service_mean", "transfer_time_mean")


class CallFactory(NamedInfo):
    """Creates calls of one type; owns the streams of its stochastic behaviors."""

    def __init__(self, params: CallTypeSpec, index: int, streams: RandomStreams) -> None:
        super().__init__(params.name, params.properties)
        self.index = index
        self.direction = params.direction
        self.prob_balk = params.prob_balk
        self.prob_transfer = params.prob_transfer
        self.params = self._check_params(params.name, params.params)
        self._streams = streams

    @property
    def is_inbound(self) -> bool:
        return self.direction == CallDirection.INBOUND

    @staticmethod
    def _check_params(name: str, params: dict[str, Any]) -> dict[str, Any]:
        for key in _POSITIVE_PARAMS:
            if key not in params:
                continue
            value = params[key]
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"call type '{name}' requires numeric params.{key}")
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"call type '{name}' requires params.{key} > 0")
        return dict(params)

    def stream(self, role: CallFactoryStreamType | CallFactoryStreamType2) -> random.Random:
        return self._streams.call_factory_stream(self.index, role)

    def balk_test(self) -> bool:
        return self.stream(CallFactoryStreamType.BALKTEST).random() < self.prob_balk

    def transfer_test(self) -> bool:
        return self.stream(CallFactoryStreamType2.PROBTRANSFER).random() < self.prob_transfer
