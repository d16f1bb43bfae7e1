"""Orchestrator tests: full runs, cache reuse, single-flight and passive replay."""

from __future__ import annotations

import json

import pytest

from rpc_latency.base.dto import RecordStatus
from rpc_latency.base.errors import ErrorKind, TransportTimeoutError
from rpc_latency.base.http import HttpReply
from rpc_latency.tests.helpers import rpc_ok

A_URL = "https://a.example"
B_URL = "https://b.example"


def _script_default_run(http) -> None:
    http.script(A_URL, rpc_ok(), elapsed_ms=120)
    http.script(B_URL, TransportTimeoutError())


def test_full_run_produces_ordered_snapshot(engine, http, sleeper, store, clock):
    _script_default_run(http)
    snapshot = engine["orchestrator"].run("testnet")

    assert snapshot is not None  # nosec B101
    assert snapshot.timestamp == clock.now  # nosec B101
    a, b = snapshot.results
    assert (a.provider, a.latency, a.samples, a.median_latency) == ("A", 120, [120], 120)  # nosec B101
    assert a.status is RecordStatus.SUCCESS  # nosec B101
    assert b.provider == "B" and b.status is RecordStatus.ERROR  # nosec B101
    assert b.error_type is ErrorKind.TIMEOUT  # nosec B101
    assert b.error_message == "Connection timed out"  # nosec B101
    assert b.samples == [] and b.latency is None and b.median_latency is None  # nosec B101

    assert http.posts() == [A_URL, B_URL]  # nosec B101
    assert sleeper.pauses == [0.3]  # nosec B101
    stored = json.loads(store.get("latency-results-testnet"))
    assert [r["provider"] for r in stored["results"]] == ["A", "B"]  # nosec B101

    state = engine["states"].get("testnet")
    assert state.has_run and not state.is_running  # nosec B101
    assert state.records == snapshot.results  # nosec B101


def test_second_run_within_ttl_reuses_snapshot(engine, http, clock):
    _script_default_run(http)
    first = engine["orchestrator"].run("testnet")
    clock.advance(60_000)
    second = engine["orchestrator"].run("testnet")
    assert second == first  # nosec B101
    assert http.posts() == [A_URL, B_URL]  # nosec B101


def test_run_after_ttl_probes_again_and_replaces_history(engine, http, clock):
    _script_default_run(http)
    engine["orchestrator"].run("testnet")
    clock.advance(301_000)
    http.script(A_URL, rpc_ok(), elapsed_ms=90)
    http.script(B_URL, rpc_ok(), elapsed_ms=200)
    snapshot = engine["orchestrator"].run("testnet")
    assert snapshot.timestamp == clock.now  # nosec B101
    assert snapshot.record_for("A").samples == [90]  # nosec B101
    assert snapshot.record_for("B").samples == [200]  # nosec B101
    assert len(http.posts()) == 4  # nosec B101


def test_cache_hit_publishes_records_and_refreshes_geo(engine, http, clock):
    _script_default_run(http)
    engine["orchestrator"].run("testnet")
    state = engine["states"].get("testnet")
    state.records = []
    geo_calls = sum(1 for c in http.calls if c[0] == "GET")
    engine["orchestrator"].run("testnet")
    assert [r.provider for r in state.records] == ["A", "B"]  # nosec B101
    assert sum(1 for c in http.calls if c[0] == "GET") == geo_calls + 1  # nosec B101


def test_unknown_network_is_a_noop(engine, http, store, json_logs):
    assert engine["orchestrator"].run("nope") is None  # nosec B101
    assert http.calls == []  # nosec B101
    assert store.keys() == []  # nosec B101
    assert "run.config_missing" in [e.get("event") for e in json_logs()]  # nosec B101


def test_empty_network_id_is_a_noop(engine, http):
    assert engine["orchestrator"].run("") is None  # nosec B101
    assert http.calls == []  # nosec B101


def test_reentrant_run_is_a_noop(engine, http):
    orchestrator = engine["orchestrator"]
    nested = []

    def _reenter():
        nested.append(orchestrator.run("testnet"))
        nested.append(engine["states"].get("testnet").is_running)
        return rpc_ok()

    http.script(A_URL, _reenter, elapsed_ms=100)
    http.script(B_URL, rpc_ok(), elapsed_ms=100)
    snapshot = orchestrator.run("testnet")
    assert nested == [None, True]  # nosec B101
    assert snapshot is not None  # nosec B101
    assert http.posts() == [A_URL, B_URL]  # nosec B101


def test_loading_records_visible_during_run(engine, http):
    seen = []

    def _observe():
        seen.extend(r.status for r in engine["states"].get("testnet").records)
        return rpc_ok()

    http.script(A_URL, _observe, elapsed_ms=10)
    http.script(B_URL, rpc_ok(), elapsed_ms=10)
    engine["orchestrator"].run("testnet")
    assert seen == [RecordStatus.LOADING, RecordStatus.LOADING]  # nosec B101


def test_passive_update_during_run_survives(engine, http, store):
    merger = engine["merger"]

    def _passive_then_reply():
        merger.apply(
            "testnet",
            {
                "A": {"latency": 50, "endpoint": A_URL},
                "Z": {"latency": 70, "endpoint": "https://z.example"},
            },
        )
        return rpc_ok()

    http.script(A_URL, _passive_then_reply, elapsed_ms=120)
    http.script(B_URL, HttpReply(status=429))
    snapshot = engine["orchestrator"].run("testnet")

    assert [r.provider for r in snapshot.results] == ["A", "B", "Z"]  # nosec B101
    a = snapshot.record_for("A")
    assert a.samples == [120, 50]  # nosec B101
    assert a.latency == 50 and a.median_latency == 85  # nosec B101
    assert snapshot.record_for("B").error_type is ErrorKind.RATE_LIMIT  # nosec B101
    assert snapshot.record_for("Z").samples == [70]  # nosec B101
    stored = json.loads(store.get("latency-results-testnet"))
    assert [r["provider"] for r in stored["results"]] == ["A", "B", "Z"]  # nosec B101
    assert engine["states"].get("testnet").pending_passive == []  # nosec B101


def test_guard_released_when_run_fails(engine, http):
    class _Broken:
        def endpoints_for(self, network_id):
            raise RuntimeError("config backend down")

    orchestrator = engine["orchestrator"]
    healthy = orchestrator.networks
    orchestrator.networks = _Broken()
    with pytest.raises(RuntimeError):
        orchestrator.run("testnet")
    assert not engine["states"].get("testnet").is_running  # nosec B101

    orchestrator.networks = healthy
    _script_default_run(http)
    assert orchestrator.run("testnet") is not None  # nosec B101


def test_single_endpoint_network_never_sleeps(engine, http, sleeper):
    from rpc_latency.config import StaticNetworkConfig

    engine["orchestrator"].networks = StaticNetworkConfig({"solo": [{"name": "A", "url": A_URL}]})
    http.script(A_URL, rpc_ok(), elapsed_ms=5)
    engine["orchestrator"].run("solo")
    assert sleeper.pauses == []  # nosec B101


def test_geo_info_recorded_on_state(engine, http):
    http.geo_reply = HttpReply(
        status=200,
        json={"city": "Berlin", "region": "Land Berlin", "country": "DE", "asn": "AS3320", "org": "Deutsche Telekom AG"},
    )
    _script_default_run(http)
    engine["orchestrator"].run("testnet")
    geo = engine["states"].get("testnet").geo_info
    assert geo.location == "Berlin, Land Berlin, DE"  # nosec B101
    assert geo.asn == "AS3320" and geo.isp == "Deutsche Telekom AG"  # nosec B101
