"""Pytest fixtures wiring the engine around deterministic test doubles."""

from __future__ import annotations

import json

import pytest

from rpc_latency.config import StaticNetworkConfig
from rpc_latency.engine import (
    Aggregator,
    GeoLocator,
    Orchestrator,
    PassiveMerger,
    Sampler,
    SnapshotCache,
    StateRegistry,
)
from rpc_latency.persistence import InMemoryKeyValueStore
from rpc_latency.tests.helpers import FakeClock, RecordingSleeper, ScriptedHttpClient


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def http() -> ScriptedHttpClient:
    return ScriptedHttpClient()


@pytest.fixture()
def sleeper() -> RecordingSleeper:
    return RecordingSleeper()


@pytest.fixture()
def networks() -> StaticNetworkConfig:
    return StaticNetworkConfig(
        {
            "testnet": [
                {"name": "A", "url": "https://a.example"},
                {"name": "B", "url": "https://b.example"},
            ]
        }
    )


@pytest.fixture()
def engine(clock, store, http, sleeper, networks):
    """Wire the engine around the fakes; returns a simple namespace dict."""

    states = StateRegistry()
    aggregator = Aggregator()
    cache = SnapshotCache(store, clock=clock)
    sampler = Sampler(http, timeout_ms=5000, monotonic=http.monotonic)
    geo = GeoLocator(http, url="https://geo.example/json/", timeout_ms=5000)
    merger = PassiveMerger(cache, states, aggregator)
    orchestrator = Orchestrator(
        networks=networks,
        sampler=sampler,
        cache=cache,
        states=states,
        geo=geo,
        aggregator=aggregator,
        sleep=sleeper,
        delay_ms=300,
    )
    return {
        "states": states,
        "cache": cache,
        "sampler": sampler,
        "merger": merger,
        "orchestrator": orchestrator,
        "geo": geo,
    }


@pytest.fixture()
def json_logs(capsys):
    """Return a reader parsing JSON log lines written to stderr since the last read."""

    def _read():
        err = capsys.readouterr().err
        return [json.loads(line) for line in err.splitlines() if line.strip().startswith("{")]

    return _read
