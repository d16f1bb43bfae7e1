"""Latency tier classification for provider records.

A record is graded by its median, falling back to the latest reading when no
median exists. Thresholds are exclusive upper bounds from
``rpc_latency.config.defaults``.
"""

from __future__ import annotations

from enum import Enum

from ..base.dto import ProviderRecord, RecordStatus
from ..config.defaults import TIER_FAST_BELOW_MS, TIER_MODERATE_BELOW_MS


class LatencyTier(str, Enum):
    PENDING = "pending"
    FAST = "fast"
    MODERATE = "moderate"
    SLOW = "slow"
    UNAVAILABLE = "unavailable"


def latency_tier(
    record: ProviderRecord,
    fast_below_ms: int = TIER_FAST_BELOW_MS,
    moderate_below_ms: int = TIER_MODERATE_BELOW_MS,
) -> LatencyTier:
    if record.status is RecordStatus.LOADING:
        return LatencyTier.PENDING
    value = record.median_latency if record.median_latency is not None else record.latency
    if record.status is RecordStatus.ERROR or value is None:
        return LatencyTier.UNAVAILABLE
    if value < fast_below_ms:
        return LatencyTier.FAST
    if value < moderate_below_ms:
        return LatencyTier.MODERATE
    return LatencyTier.SLOW


__all__ = ["LatencyTier", "latency_tier"]
