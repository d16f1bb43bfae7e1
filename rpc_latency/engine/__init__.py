"""Latency measurement engine.

Components, leaves first: :class:`Sampler` (one timed probe),
:class:`Aggregator` (bounded history + median), :class:`SnapshotCache`
(TTL-boxed persistence), :class:`PassiveMerger` (passive-stream
reconciliation) and :class:`Orchestrator` (sequential per-network runs).
"""

from .aggregator import Aggregator, append_sample, median
from .cache import SnapshotCache, passive_key, snapshot_key
from .geo import GeoLocator, geo_from_payload
from .merger import PassiveMerger, reconcile
from .orchestrator import Orchestrator
from .sampler import Sampler, probe_body
from .state import NetworkState, StateRegistry
from .tiers import LatencyTier, latency_tier

__all__ = [
    "Aggregator",
    "append_sample",
    "median",
    "SnapshotCache",
    "snapshot_key",
    "passive_key",
    "GeoLocator",
    "geo_from_payload",
    "PassiveMerger",
    "reconcile",
    "Orchestrator",
    "Sampler",
    "probe_body",
    "NetworkState",
    "StateRegistry",
    "LatencyTier",
    "latency_tier",
]
