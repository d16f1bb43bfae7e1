"""
Pydantic DTOs for persisted and streamed engine data.

External dependencies: Pydantic only. Validation failures raise
``pydantic.ValidationError``; the cache layer converts those into cache
misses.
"""

from .passive_sample import PassiveSample, PassiveUpdate
from .provider_record import ProviderRecord, RecordStatus
from .snapshot import Snapshot

__all__ = [
    "PassiveSample",
    "PassiveUpdate",
    "ProviderRecord",
    "RecordStatus",
    "Snapshot",
]
