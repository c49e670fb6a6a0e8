"""Shared fixtures: a deterministic app with a frozen clock and scripted randomness."""

import pytest

from mocktarget.app import App
from mocktarget.config import ServerConfig
from mocktarget.endpoints import create_app
from mocktarget.state import StateStore
from mocktarget.testing import FixedRandom, FrozenClock


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig(time_scale=0.0, access_log=False)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def rng() -> FixedRandom:
    return FixedRandom()


@pytest.fixture
def store(clock: FrozenClock) -> StateStore:
    return StateStore(clock)


@pytest.fixture
def app(config: ServerConfig, clock: FrozenClock, rng: FixedRandom, store: StateStore) -> App:
    return create_app(config, state=store, clock=clock, rng=rng)
