"""Library surface consumed by a hosting application.

``LatencyService`` wraps the engine components behind the three entry points
a host needs, plus read accessors for the live view:

- :meth:`run_latency_test`: run (or reuse) a measurement for a network
- :meth:`get_snapshot`: last persisted snapshot if still fresh
- :meth:`watch`: hydrate from storage and subscribe to passive updates

Watching mirrors what a host does when it starts displaying a network: a
fresh stored snapshot becomes the live view, the current passive payload is
merged once, and later passive writes are merged as they arrive.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from ..base.dto import ProviderRecord, Snapshot
from ..base.interfaces import IKeyValueStore, Unsubscribe
from ..base.log_support import LogContext
from ..base.logging import get_logger, log_event
from ..base.models import GeoInfo
from ..engine import Orchestrator, PassiveMerger, SnapshotCache, StateRegistry, passive_key

logger = get_logger(__name__)


class LatencyService:
    """Facade over orchestrator, merger and cache sharing one state registry."""

    def __init__(
        self,
        store: IKeyValueStore,
        cache: SnapshotCache,
        orchestrator: Orchestrator,
        merger: PassiveMerger,
        states: StateRegistry,
    ) -> None:
        self.store = store
        self.cache = cache
        self.orchestrator = orchestrator
        self.merger = merger
        self.states = states
        self._watches: Dict[str, Unsubscribe] = {}

    # ---- Entry points ----
    def run_latency_test(self, network_id: str) -> Optional[Snapshot]:
        return self.orchestrator.run(network_id)

    def get_snapshot(self, network_id: str) -> Optional[Snapshot]:
        return self.cache.load(network_id)

    def watch(self, network_id: str) -> Unsubscribe:
        """Hydrate ``network_id`` from storage and follow passive updates.

        Calling ``watch`` again for an already-watched network returns the
        existing subscription's unsubscribe function.
        """
        if network_id in self._watches:
            return self._watches[network_id]

        state = self.states.get(network_id)
        cached = self.cache.load(network_id)
        if cached is not None:
            with state.lock:
                if not state.records:
                    state.records = list(cached.results)
                state.has_run = True

        self.merger.apply_raw(network_id, self.store.get(passive_key(network_id)))
        unsubscribe = self.merger.listen(network_id, self.store)

        def _stop() -> None:
            unsubscribe()
            self._watches.pop(network_id, None)

        self._watches[network_id] = _stop
        log_event(logger, "service.watch", LogContext(network=network_id), hydrated=cached is not None)
        return _stop

    def close(self) -> None:
        for stop in list(self._watches.values()):
            stop()

    # ---- Live view ----
    def results(self, network_id: str) -> List[ProviderRecord]:
        state = self.states.get(network_id)
        with state.lock:
            return list(state.records)

    def is_running(self, network_id: str) -> bool:
        state = self.states.peek(network_id)
        return state.is_running if state is not None else False

    def has_run(self, network_id: str) -> bool:
        state = self.states.peek(network_id)
        return state.has_run if state is not None else False

    def geo_info(self, network_id: str) -> GeoInfo:
        state = self.states.get(network_id)
        with state.lock:
            return state.geo_info

    def last_updated_seconds(self, network_id: str) -> Optional[int]:
        """Whole seconds since the persisted snapshot was written."""
        age = self.cache.age_ms(network_id)
        return None if age is None else age // 1000


__all__ = ["LatencyService"]
