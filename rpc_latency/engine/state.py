"""Per-network live state and single-flight guards.

Each network id maps to one :class:`NetworkState`, created lazily and kept
for the lifetime of the registry. A state carries:

- ``lock``: re-entrant lock guarding every read-modify-write of the live
  records and of the network's cache entry;
- ``run_guard``: non-blocking single-flight lock held for the whole of an
  orchestrated run;
- the live view (``records``), run flags, observer geo info, and passive
  updates queued while a run is in flight.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..base.dto import PassiveUpdate, ProviderRecord
from ..base.models import GeoInfo


@dataclass
class NetworkState:
    """Mutable live view for one network. Access under ``lock``."""

    network_id: str
    records: List[ProviderRecord] = field(default_factory=list)
    has_run: bool = False
    geo_info: GeoInfo = field(default_factory=GeoInfo)
    pending_passive: List[PassiveUpdate] = field(default_factory=list)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    run_guard: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def is_running(self) -> bool:
        return self.run_guard.locked()

    def try_begin_run(self) -> bool:
        """Acquire the single-flight guard without blocking."""
        return self.run_guard.acquire(blocking=False)

    def end_run(self) -> None:
        with self.lock:
            self.pending_passive.clear()
        self.run_guard.release()

    def drain_pending(self) -> List[PassiveUpdate]:
        with self.lock:
            pending, self.pending_passive = self.pending_passive, []
        return pending


class StateRegistry:
    """Thread-safe lazily populated map of network id -> :class:`NetworkState`."""

    def __init__(self) -> None:
        self._states: Dict[str, NetworkState] = {}
        self._lock = threading.Lock()

    def get(self, network_id: str) -> NetworkState:
        state = self._states.get(network_id)
        if state is not None:
            return state
        with self._lock:
            state = self._states.get(network_id)
            if state is None:
                state = NetworkState(network_id=network_id)
                self._states[network_id] = state
            return state

    def peek(self, network_id: str) -> Optional[NetworkState]:
        return self._states.get(network_id)


__all__ = ["NetworkState", "StateRegistry"]
