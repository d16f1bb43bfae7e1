"""Structured logging: env level override, JSON payloads and file output."""

from __future__ import annotations

import io
import json
import logging
import sys
from logging.handlers import RotatingFileHandler

from rpc_latency.base.log_support import JsonFormatter, LogContext
from rpc_latency.base.logging import configure_logger, get_logger, log_event


def test_env_overrides_level(monkeypatch, capsys):
    monkeypatch.setenv("RPC_LATENCY_LOG_LEVEL", "ERROR")
    logger = get_logger("rpc_latency.tests.level", level=logging.DEBUG)
    logger.info("hidden")
    assert capsys.readouterr().err == ""  # nosec B101
    logger.error("shown")
    data = json.loads(capsys.readouterr().err.strip())
    assert data["level"] == "ERROR"  # nosec B101
    monkeypatch.delenv("RPC_LATENCY_LOG_LEVEL")
    get_logger("rpc_latency.tests.level")


def test_log_event_hoists_context_and_drops_none(capsys):
    logger = get_logger("rpc_latency.tests.event")
    ctx = LogContext(network="eth", provider="Ankr", run_id="r1")
    log_event(logger, "probe.finish", ctx, latency_ms=42, error_type=None)
    data = json.loads(capsys.readouterr().err.strip())
    assert data["event"] == "probe.finish"  # nosec B101
    assert (data["network"], data["provider"], data["run_id"]) == ("eth", "Ankr", "r1")  # nosec B101
    assert data["latency_ms"] == 42  # nosec B101
    assert "error_type" not in data and "endpoint" not in data  # nosec B101
    assert data["logger"] == "rpc_latency.tests.event"  # nosec B101


def test_child_logger_has_no_own_handlers():
    child = get_logger("rpc_latency.tests.child")
    assert child.handlers == []  # nosec B101
    assert child.propagate  # nosec B101
    assert len(logging.getLogger("rpc_latency").handlers) >= 1  # nosec B101


def test_json_formatter_keeps_plain_messages():
    record = logging.LogRecord("rpc_latency.x", logging.WARNING, __file__, 0, "plain text", (), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "plain text" and payload["level"] == "WARNING"  # nosec B101


def test_configure_logger_writes_rotating_file(tmp_path):
    target = tmp_path / "logs" / "latency.log"
    logger = configure_logger(level="INFO", file_path=str(target))
    try:
        log_event(get_logger("rpc_latency.tests.file"), "run.finish", LogContext(network="eth"), providers=2)
        for handler in logger.handlers:
            handler.flush()
        lines = [json.loads(line) for line in target.read_text(encoding="utf-8").splitlines()]
        assert lines[-1]["event"] == "run.finish" and lines[-1]["providers"] == 2  # nosec B101
    finally:
        configure_logger(file_path=None)
    assert not any(getattr(h, "_rpc_latency_rotating", False) for h in logger.handlers)  # nosec B101
    assert not any(isinstance(h, RotatingFileHandler) for h in logger.handlers)  # nosec B101


def test_console_follows_swapped_stderr(monkeypatch):
    logger = get_logger("rpc_latency.tests.swap")
    replacement = io.StringIO()
    monkeypatch.setattr(sys, "stderr", replacement)
    log_event(logger, "probe.finish", LogContext(network="eth"), latency_ms=7)
    data = json.loads(replacement.getvalue().strip())
    assert data["event"] == "probe.finish" and data["latency_ms"] == 7  # nosec B101
