"""Reconciliation of passive-stream latency updates into provider records.

Passive updates are produced by a monitoring mechanism outside the engine and
delivered through the key-value store under ``blockheight-latency-{id}``. For
each ``provider -> {latency, endpoint}`` entry, in arrival order:

- entries with a missing, null or ``<= 0`` latency are ignored entirely;
- a known provider gets the latency appended to its history (FIFO, capped),
  ``latest`` set to it, the median recomputed and status ``success``;
- an unknown provider is appended as a new single-sample record.

Identical updates applied twice append twice: merging is by append, never by
value deduplication.

:meth:`PassiveMerger.apply` runs independently of orchestrated runs. While a
run is in flight for the same network, applied updates are also queued on the
network state so the orchestrator can replay them onto its own output before
persisting it.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Union

from ..base.dto import PassiveSample, PassiveUpdate, ProviderRecord, Snapshot
from ..base.interfaces import IKeyValueStore, Unsubscribe
from ..base.log_support import LogContext
from ..base.logging import get_logger, log_event
from .aggregator import Aggregator
from .cache import SnapshotCache, decode_passive, passive_key
from .state import StateRegistry

logger = get_logger(__name__)

PassiveInput = Union[PassiveUpdate, Mapping[str, Union[PassiveSample, Mapping[str, object]]]]


def coerce_update(updates: PassiveInput) -> PassiveUpdate:
    """Accept a :class:`PassiveUpdate` or a plain mapping and validate it."""
    if isinstance(updates, PassiveUpdate):
        return updates
    return PassiveUpdate.model_validate(
        {k: (v.model_dump() if isinstance(v, PassiveSample) else v) for k, v in updates.items()}
    )


def reconcile(
    records: Iterable[ProviderRecord],
    updates: PassiveInput,
    aggregator: Optional[Aggregator] = None,
) -> List[ProviderRecord]:
    """Return ``records`` with ``updates`` folded in (pure).

    Record order is preserved; previously unknown providers are appended in
    the order they appear in ``updates``.
    """
    agg = aggregator or Aggregator()
    result = list(records)
    index = {r.provider: i for i, r in enumerate(result)}
    for provider, sample in coerce_update(updates).items():
        if sample.latency is None or sample.latency <= 0:
            continue
        if provider in index:
            pos = index[provider]
            result[pos] = agg.add_sample(result[pos], sample.latency)
        else:
            seed = ProviderRecord.loading(provider=provider, endpoint=sample.endpoint)
            index[provider] = len(result)
            result.append(agg.add_sample(seed, sample.latency))
    return result


class PassiveMerger:
    """Applies passive updates to live network state and persists them."""

    def __init__(
        self,
        cache: SnapshotCache,
        states: StateRegistry,
        aggregator: Optional[Aggregator] = None,
    ) -> None:
        self.cache = cache
        self.states = states
        self.aggregator = aggregator or Aggregator()

    def reconcile(self, records: Iterable[ProviderRecord], updates: PassiveInput) -> List[ProviderRecord]:
        return reconcile(records, updates, self.aggregator)

    def apply(self, network_id: str, updates: PassiveInput) -> List[ProviderRecord]:
        """Merge ``updates`` into the live records of ``network_id``.

        Returns
        -------
        List[ProviderRecord]
            The resulting live records. When non-empty they are persisted as a
            fresh snapshot and the network is marked as having results.
        """
        update = coerce_update(updates)
        state = self.states.get(network_id)
        with state.lock:
            merged = self.reconcile(state.records, update)
            state.records = merged
            if state.is_running:
                state.pending_passive.append(update)
            if merged:
                self.cache.save(network_id, Snapshot(results=merged, timestamp=self.cache.clock()))
                state.has_run = True
        log_event(
            logger,
            "passive.apply",
            LogContext(network=network_id),
            providers=len(update),
            records=len(merged),
        )
        return merged

    def apply_raw(self, network_id: str, raw: Optional[str]) -> Optional[List[ProviderRecord]]:
        """Decode a stored passive payload and apply it; ignores bad/empty data."""
        if not raw:
            return None
        update = decode_passive(network_id, raw)
        if update is None or len(update) == 0:
            return None
        return self.apply(network_id, update)

    def listen(self, network_id: str, store: IKeyValueStore) -> Unsubscribe:
        """Subscribe to passive-key changes for ``network_id`` on ``store``."""
        key = passive_key(network_id)

        def _on_change(changed_key: str, value: str) -> None:
            if changed_key == key:
                self.apply_raw(network_id, value)

        return store.subscribe(key, _on_change)


__all__ = ["PassiveMerger", "reconcile", "coerce_update"]
