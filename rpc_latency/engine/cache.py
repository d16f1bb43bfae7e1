"""Time-boxed snapshot cache over an ``IKeyValueStore``.

Keys are derived deterministically from the network identifier:

- ``latency-results-{networkId}``: the last persisted :class:`Snapshot`
- ``blockheight-latency-{networkId}``: passive-stream updates (read-only here)

Freshness rule: a snapshot is usable only while ``now - timestamp`` is below
the TTL (5 minutes by default). Stale snapshots are reported as absent but
are left in place. Malformed stored data is logged and reported as absent;
parse failures never propagate to callers.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from pydantic import ValidationError

from ..base.dto import PassiveUpdate, Snapshot
from ..base.errors import StorageParseError
from ..base.interfaces import IKeyValueStore
from ..base.log_support import LogContext
from ..base.logging import get_logger, log_event
from ..config.defaults import LATENCY_DATA_TTL_MS, PASSIVE_KEY_PREFIX, SNAPSHOT_KEY_PREFIX

logger = get_logger(__name__)

Clock = Callable[[], int]


def now_ms() -> int:
    """Wall-clock epoch milliseconds."""
    return int(time.time() * 1000)


def snapshot_key(network_id: str) -> str:
    return f"{SNAPSHOT_KEY_PREFIX}{network_id}"


def passive_key(network_id: str) -> str:
    return f"{PASSIVE_KEY_PREFIX}{network_id}"


class SnapshotCache:
    """Loads and saves per-network snapshots with a TTL policy."""

    def __init__(self, store: IKeyValueStore, clock: Clock = now_ms, ttl_ms: int = LATENCY_DATA_TTL_MS) -> None:
        self.store = store
        self.clock = clock
        self.ttl_ms = ttl_ms

    # ------------------------------------------------------------------ #
    def is_fresh(self, snapshot: Snapshot) -> bool:
        return self.clock() - snapshot.timestamp < self.ttl_ms

    def _decode_snapshot(self, key: str, raw: str) -> Snapshot:
        try:
            return Snapshot.model_validate_json(raw)
        except ValidationError as exc:
            raise StorageParseError(key, raw=exc) from exc

    def peek(self, network_id: str) -> Optional[Snapshot]:
        """Return the stored snapshot regardless of age, or ``None``."""
        key = snapshot_key(network_id)
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return self._decode_snapshot(key, raw)
        except StorageParseError as exc:
            log_event(
                logger,
                "cache.parse_error",
                LogContext(network=network_id),
                level=logging.WARNING,
                key=key,
                error=str(exc.raw),
            )
            return None

    def load(self, network_id: str) -> Optional[Snapshot]:
        """Return the stored snapshot if fresh and non-empty, else ``None``."""
        snapshot = self.peek(network_id)
        if snapshot is None or not snapshot.results or not self.is_fresh(snapshot):
            return None
        return snapshot

    def save(self, network_id: str, snapshot: Snapshot) -> None:
        self.store.set(snapshot_key(network_id), snapshot.to_json())
        log_event(
            logger,
            "cache.save",
            LogContext(network=network_id),
            level=logging.DEBUG,
            providers=len(snapshot.results),
            timestamp=snapshot.timestamp,
        )

    def age_ms(self, network_id: str) -> Optional[int]:
        """Milliseconds since the stored snapshot was written, or ``None``."""
        snapshot = self.peek(network_id)
        if snapshot is None:
            return None
        return max(0, self.clock() - snapshot.timestamp)

    # ------------------------------------------------------------------ #
    def load_passive(self, network_id: str) -> Optional[PassiveUpdate]:
        """Parse the passive-stream key; ``None`` when absent or malformed."""
        key = passive_key(network_id)
        raw = self.store.get(key)
        if raw is None:
            return None
        return decode_passive(network_id, raw)


def decode_passive(network_id: str, raw: str) -> Optional[PassiveUpdate]:
    """Decode a passive-stream payload, logging and dropping malformed data."""
    try:
        return PassiveUpdate.model_validate_json(raw)
    except ValidationError as exc:
        log_event(
            logger,
            "passive.parse_error",
            LogContext(network=network_id),
            level=logging.WARNING,
            key=passive_key(network_id),
            error=str(exc),
        )
        return None


__all__ = ["SnapshotCache", "snapshot_key", "passive_key", "decode_passive", "now_ms"]
