from __future__ import annotations

import pytest

from ccsim.errors import ConfigurationError
from ccsim.model import CallFactory, CallTypeSpec
from ccsim.streams import CallFactoryStreamType, CallFactoryStreamType2, RandomStreams


def _factory(index: int = 0, **fields) -> tuple[CallFactory, RandomStreams]:
    streams = RandomStreams(5, num_call_factories=2)
    params = CallTypeSpec.model_validate({"name": "support", **fields})
    return CallFactory(params, index, streams), streams


def test_streams_are_bound_to_factory_index() -> None:
    factory, streams = _factory(index=1)
    assert factory.stream(CallFactoryStreamType.SERVICE) is streams.call_factory_stream(
        1, CallFactoryStreamType.SERVICE
    )
    assert factory.stream(CallFactoryStreamType2.PROBTRANSFER) is streams.call_factory_stream(
        1, CallFactoryStreamType2.PROBTRANSFER
    )
    assert factory.is_inbound


def test_transfer_test_follows_transfer_probability() -> None:
    always, _ = _factory(prob_transfer=1.0)
    never, _ = _factory(prob_transfer=0.0)
    assert all(always.transfer_test() for _ in range(20))
    assert not any(never.transfer_test() for _ in range(20))


def test_transfer_test_draws_from_its_own_stream() -> None:
    factory, streams = _factory(prob_transfer=0.5)
    twin = streams.copy()
    expected = [
        twin.call_factory_stream(0, CallFactoryStreamType2.PROBTRANSFER).random() < 0.5 for _ in range(10)
    ]
    factory.balk_test()
    assert [factory.transfer_test() for _ in range(10)] == expected


def test_balk_test_follows_balking_probability() -> None:
    always, _ = _factory(prob_balk=1.0)
    never, _ = _factory(prob_balk=0.0)
    assert always.balk_test()
    assert not never.balk_test()


@pytest.mark.parametrize("params", [{"service_mean": 0}, {"patience_mean": "slow"}, {"transfer_time_mean": True}])
def test_rejects_invalid_means(params: dict) -> None:
    with pytest.raises(ConfigurationError):
        _factory(params=params)
