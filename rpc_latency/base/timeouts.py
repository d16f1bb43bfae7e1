"""Unified timing configuration for the latency engine.

This module centralizes the timing values used by the engine (probe deadline,
pause between probes, geo lookup deadline) so that no module hard-codes its
own numbers.

Key Components
--------------
TimeoutConfig
    Frozen dataclass capturing normalized values in milliseconds.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and whenever they change. Supported environment variables (all
    optional, positive integers in milliseconds):
        RPC_LATENCY_PROBE_TIMEOUT_MS
        RPC_LATENCY_PROBE_DELAY_MS
        RPC_LATENCY_GEO_TIMEOUT_MS
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from ..config.defaults import GEO_TIMEOUT_MS, INTER_PROBE_DELAY_MS, PROBE_TIMEOUT_MS

_ENV_NAMES = (
    "RPC_LATENCY_PROBE_TIMEOUT_MS",
    "RPC_LATENCY_PROBE_DELAY_MS",
    "RPC_LATENCY_GEO_TIMEOUT_MS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timing values (milliseconds).

    Attributes:
        probe_timeout_ms: Hard deadline for a single probe request.
        inter_probe_delay_ms: Pause between consecutive probes of one run.
        geo_timeout_ms: Deadline for the observer geo lookup.
    """

    probe_timeout_ms: int = PROBE_TIMEOUT_MS
    inter_probe_delay_ms: int = INTER_PROBE_DELAY_MS
    geo_timeout_ms: int = GEO_TIMEOUT_MS


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_int(name: str, default: int) -> int:
    """Parse an environment variable as a non-negative integer.

    Returns ``default`` if the variable is unset, not an integer, or negative.
    """
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    return val if val >= 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED

    _CACHED = TimeoutConfig(
        probe_timeout_ms=_parse_env_int("RPC_LATENCY_PROBE_TIMEOUT_MS", PROBE_TIMEOUT_MS),
        inter_probe_delay_ms=_parse_env_int("RPC_LATENCY_PROBE_DELAY_MS", INTER_PROBE_DELAY_MS),
        geo_timeout_ms=_parse_env_int("RPC_LATENCY_GEO_TIMEOUT_MS", GEO_TIMEOUT_MS),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
