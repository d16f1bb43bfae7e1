"""
Snapshot DTO: a complete, timestamped set of provider records for a network.

Snapshots are superseded, never mutated: every run or passive merge writes a
new one. ``timestamp`` is epoch milliseconds.
"""

from __future__ import annotations

import json
from typing import List

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

from .provider_record import ProviderRecord


class Snapshot(BaseModel):
    """Ordered provider records plus creation time (epoch ms)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    results: List[ProviderRecord] = Field(default_factory=list)
    timestamp: NonNegativeInt

    def record_for(self, provider: str) -> ProviderRecord | None:
        return next((r for r in self.results if r.provider == provider), None)

    def to_json(self) -> str:
        payload = {"results": [r.to_wire() for r in self.results], "timestamp": self.timestamp}
        return json.dumps(payload, ensure_ascii=False)


__all__ = ["Snapshot"]
