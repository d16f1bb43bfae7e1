"""Full latency test run for one network.

A run walks the configured endpoints of a network strictly sequentially,
with a fixed pause between consecutive probes to stay clear of provider rate
limits, and persists the outcome as a new snapshot.

Sequence
--------
1. Take the network's single-flight guard without blocking; a concurrent
   call for the same network is a no-op and returns ``None``.
2. If the cache holds a fresh snapshot, publish it as the live view, refresh
   the observer geo info and return it without probing.
3. Unknown network id: log ``run.config_missing`` and return ``None``.
4. Publish one ``loading`` record per endpoint.
5. Look up geo info (best effort).
6. Probe each endpoint; fold each outcome into a fresh record, so a run
   replaces sample histories wholesale.
7. Replay passive updates that arrived during the run, persist, publish.

The guard is released on every exit path, including failures.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Callable, List, Optional

from ..base.dto import ProviderRecord, Snapshot
from ..base.errors import ConfigMissingError
from ..base.interfaces import INetworkConfigProvider
from ..base.log_support import LogContext
from ..base.logging import get_logger, log_event
from ..base.timeouts import get_timeout_config
from .aggregator import Aggregator
from .cache import SnapshotCache
from .geo import GeoLocator
from .merger import reconcile
from .sampler import Sampler
from .state import NetworkState, StateRegistry

logger = get_logger(__name__)

Sleeper = Callable[[float], None]


class Orchestrator:
    """Drives sequential probe runs per network."""

    def __init__(
        self,
        networks: INetworkConfigProvider,
        sampler: Sampler,
        cache: SnapshotCache,
        states: StateRegistry,
        geo: Optional[GeoLocator] = None,
        aggregator: Optional[Aggregator] = None,
        sleep: Sleeper = time.sleep,
        delay_ms: Optional[int] = None,
    ) -> None:
        self.networks = networks
        self.sampler = sampler
        self.cache = cache
        self.states = states
        self.geo = geo
        self.aggregator = aggregator or Aggregator()
        self._sleep = sleep
        self._delay_ms = delay_ms

    @property
    def delay_ms(self) -> int:
        return self._delay_ms if self._delay_ms is not None else get_timeout_config().inter_probe_delay_ms

    def run(self, network_id: str) -> Optional[Snapshot]:
        """Run (or reuse) a latency test for ``network_id``.

        Returns
        -------
        Optional[Snapshot]
            The fresh cached or newly measured snapshot; ``None`` when a run
            is already in flight for the network or the network is unknown.
        """
        if not network_id:
            return None
        state = self.states.get(network_id)
        ctx = LogContext(network=network_id, run_id=uuid.uuid4().hex[:12])
        if not state.try_begin_run():
            log_event(logger, "run.skip", ctx, reason="already_running")
            return None
        try:
            return self._run(state, ctx)
        finally:
            state.end_run()

    def _refresh_geo(self, state: NetworkState) -> None:
        if self.geo is None:
            return
        info = self.geo.lookup()
        with state.lock:
            state.geo_info = info

    def _run(self, state: NetworkState, ctx: LogContext) -> Optional[Snapshot]:
        network_id = state.network_id
        cached = self.cache.load(network_id)
        if cached is not None:
            with state.lock:
                state.records = list(cached.results)
                state.has_run = True
            log_event(logger, "run.cache_hit", ctx, providers=len(cached.results), timestamp=cached.timestamp)
            self._refresh_geo(state)
            return cached

        endpoints = self.networks.endpoints_for(network_id)
        if endpoints is None:
            err = ConfigMissingError(network_id)
            log_event(logger, "run.config_missing", ctx, level=logging.WARNING, error=err.message)
            return None

        started = time.monotonic()
        log_event(logger, "run.start", ctx, endpoints=len(endpoints), delay_ms=self.delay_ms)
        loading = [ProviderRecord.loading(e.provider, e.url) for e in endpoints]
        with state.lock:
            state.records = list(loading)

        self._refresh_geo(state)

        results: List[ProviderRecord] = []
        for i, endpoint in enumerate(endpoints):
            if i > 0 and self.delay_ms > 0:
                self._sleep(self.delay_ms / 1000.0)
            outcome = self.sampler.probe(endpoint)
            record = self.aggregator.ingest(loading[i], outcome)
            results.append(record)
            with state.lock:
                if i < len(state.records) and state.records[i].provider == record.provider:
                    state.records[i] = record

        with state.lock:
            final = results
            for update in state.drain_pending():
                final = reconcile(final, update, self.aggregator)
            snapshot = Snapshot(results=final, timestamp=self.cache.clock())
            self.cache.save(network_id, snapshot)
            state.records = list(final)
            state.has_run = True

        log_event(
            logger,
            "run.finish",
            ctx,
            providers=len(final),
            failures=sum(1 for r in final if r.error_type is not None),
            duration_ms=int((time.monotonic() - started) * 1000),
        )
        return snapshot


__all__ = ["Orchestrator"]
