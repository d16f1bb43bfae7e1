"""Minimal dependency injection container for the latency engine.

Goals:
- Centralize construction of the shared store, HTTP client and engine parts.
- Let hosts and tests swap any collaborator by passing it in ``config``.

Recognized ``config`` keys (all optional):

``store``        an ``IKeyValueStore`` (default: in-memory, or SQLite when
                 ``db_path`` is given)
``db_path``      SQLite file for the default store
``http``         an ``IHttpJsonClient`` (default: pooled ``HttpxJsonClient``)
``networks``     an ``INetworkConfigProvider`` or a plain network mapping
``clock``        epoch-millisecond clock for TTL decisions
``sleep``        sleeper used between probes
``monotonic``    monotonic clock (seconds) used to time probes
``ttl_ms``, ``history_cap``, ``probe_timeout_ms``, ``delay_ms``, ``geo_url``
"""

from __future__ import annotations

import time
from typing import Any, Dict, Mapping

from ..base.http import HttpxJsonClient
from ..config import StaticNetworkConfig
from ..config.defaults import GEO_LOOKUP_URL, LATENCY_DATA_TTL_MS, SAMPLE_HISTORY_CAP
from ..engine import (
    Aggregator,
    GeoLocator,
    Orchestrator,
    PassiveMerger,
    Sampler,
    SnapshotCache,
    StateRegistry,
)
from ..engine.cache import now_ms
from ..persistence import InMemoryKeyValueStore
from ..persistence.sqlite import open_store
from ..service.latency_service import LatencyService


class LatencyContainer:
    """Builds and caches engine singletons."""

    def __init__(self, config: Dict[str, Any] | None = None) -> None:
        """Initialize the container with optional configuration overrides.

        Args:
            config: Optional dictionary of collaborators and settings (see
                module docstring).
        """
        self._config = config or {}
        self._singletons: Dict[str, Any] = {}

    def _once(self, name: str, factory):
        if name not in self._singletons:
            self._singletons[name] = factory()
        return self._singletons[name]

    # ---- Collaborators ----
    def store(self):
        def _build():
            if "store" in self._config:
                return self._config["store"]
            if self._config.get("db_path"):
                return open_store(self._config["db_path"])
            return InMemoryKeyValueStore()

        return self._once("store", _build)

    def http(self):
        return self._once("http", lambda: self._config.get("http") or HttpxJsonClient())

    def networks(self):
        def _build():
            networks = self._config.get("networks")
            if networks is None or isinstance(networks, Mapping):
                return StaticNetworkConfig(networks)
            return networks

        return self._once("networks", _build)

    # ---- Engine ----
    def states(self) -> StateRegistry:
        return self._once("states", StateRegistry)

    def aggregator(self) -> Aggregator:
        return self._once("aggregator", lambda: Aggregator(self._config.get("history_cap", SAMPLE_HISTORY_CAP)))

    def cache(self) -> SnapshotCache:
        return self._once(
            "cache",
            lambda: SnapshotCache(
                self.store(),
                clock=self._config.get("clock", now_ms),
                ttl_ms=self._config.get("ttl_ms", LATENCY_DATA_TTL_MS),
            ),
        )

    def sampler(self) -> Sampler:
        return self._once(
            "sampler",
            lambda: Sampler(
                self.http(),
                timeout_ms=self._config.get("probe_timeout_ms"),
                monotonic=self._config.get("monotonic", time.monotonic),
            ),
        )

    def geo_http(self):
        return self._once("geo_http", lambda: self._config.get("http") or HttpxJsonClient(purpose="geo"))

    def geo(self) -> GeoLocator:
        return self._once("geo", lambda: GeoLocator(self.geo_http(), url=self._config.get("geo_url", GEO_LOOKUP_URL)))

    def merger(self) -> PassiveMerger:
        return self._once("merger", lambda: PassiveMerger(self.cache(), self.states(), self.aggregator()))

    def orchestrator(self) -> Orchestrator:
        return self._once(
            "orchestrator",
            lambda: Orchestrator(
                networks=self.networks(),
                sampler=self.sampler(),
                cache=self.cache(),
                states=self.states(),
                geo=self.geo(),
                aggregator=self.aggregator(),
                sleep=self._config.get("sleep", time.sleep),
                delay_ms=self._config.get("delay_ms"),
            ),
        )

    def service(self) -> LatencyService:
        return self._once(
            "service",
            lambda: LatencyService(
                store=self.store(),
                cache=self.cache(),
                orchestrator=self.orchestrator(),
                merger=self.merger(),
                states=self.states(),
            ),
        )

    def clear(self):  # testing convenience
        """Drop every cached singleton."""
        self._singletons.clear()


def build_container(config: Dict[str, Any] | None = None) -> LatencyContainer:
    """Construct and return a new :class:`LatencyContainer`."""
    return LatencyContainer(config=config)


__all__ = ["LatencyContainer", "build_container"]
