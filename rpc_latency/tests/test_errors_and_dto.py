"""Error taxonomy, classification helpers and DTO invariants."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rpc_latency.base.dto import PassiveUpdate, ProviderRecord, RecordStatus, Snapshot
from rpc_latency.base.errors import (
    ConfigMissingError,
    ErrorKind,
    LatencyError,
    StorageParseError,
    TransportTimeoutError,
    classify_http_status,
    classify_rpc_body,
)
from rpc_latency.base.models import Endpoint, ProbeOutcome


def test_error_kind_wire_values():
    assert [k.value for k in ErrorKind] == [  # nosec B101
        "timeout",
        "rate-limit",
        "connection",
        "rpc-error",
        "unknown",
    ]


def test_structured_errors_carry_kind():
    err = TransportTimeoutError()
    assert isinstance(err, LatencyError)  # nosec B101
    assert err.kind is ErrorKind.TIMEOUT and err.message == "Connection timed out"  # nosec B101
    assert StorageParseError("latency-results-eth").key == "latency-results-eth"  # nosec B101
    assert ConfigMissingError("zz").network == "zz"  # nosec B101


@pytest.mark.parametrize("status", [200, 201, 204, 299])
def test_2xx_not_classified(status):
    assert classify_http_status(status) is None  # nosec B101


def test_rpc_body_without_error_is_success():
    assert classify_rpc_body({"result": "0x1"}) is None  # nosec B101
    assert classify_rpc_body(["batch"]) is None  # nosec B101


def test_probe_outcome_requires_exactly_one_side():
    ep = Endpoint("A", "https://a.example")
    with pytest.raises(ValueError):
        ProbeOutcome(endpoint=ep)
    with pytest.raises(ValueError):
        ProbeOutcome(endpoint=ep, latency=1, error_kind=ErrorKind.UNKNOWN)
    with pytest.raises(ValueError):
        ProbeOutcome.success(ep, -1)


def test_record_median_must_match_samples():
    with pytest.raises(ValidationError):
        ProviderRecord(provider="A", endpoint="x", samples=[1], status=RecordStatus.SUCCESS)
    with pytest.raises(ValidationError):
        ProviderRecord(provider="A", endpoint="x", median_latency=5)


def test_record_accepts_aliases_and_names():
    by_alias = ProviderRecord.model_validate(
        {"provider": "A", "endpoint": "x", "latency": 3, "medianLatency": 3, "samples": [3], "status": "success"}
    )
    by_name = ProviderRecord(provider="A", endpoint="x", latency=3, median_latency=3, samples=[3], status="success")
    assert by_alias == by_name  # nosec B101


def test_snapshot_json_parses_back():
    record = ProviderRecord(provider="A", endpoint="x", latency=3, median_latency=3, samples=[3], status="success")
    snapshot = Snapshot(results=[record], timestamp=10)
    assert Snapshot.model_validate_json(snapshot.to_json()) == snapshot  # nosec B101
    assert snapshot.record_for("missing") is None  # nosec B101


def test_passive_update_ignores_extra_fields_and_keeps_order():
    update = PassiveUpdate.model_validate(
        {"B": {"latency": 5, "endpoint": "b", "timestamp": 1, "blockHeight": 99}, "A": {"latency": 7}}
    )
    assert [name for name, _ in update.items()] == ["B", "A"]  # nosec B101
    assert len(update) == 2  # nosec B101
