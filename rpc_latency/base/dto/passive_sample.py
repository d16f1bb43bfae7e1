"""
Pydantic DTOs for the passive latency stream.

The passive stream is written by another subsystem under
``blockheight-latency-{networkId}`` as a JSON object mapping provider names
to ``{"latency": ms, "endpoint": url, "timestamp": epoch_ms}``. Only
``latency`` and ``endpoint`` are consumed; ``timestamp`` is optional.
"""

from __future__ import annotations

import math
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, RootModel, field_validator


class PassiveSample(BaseModel):
    """A single externally-measured latency for one provider.

    ``latency`` is ``None`` when the stream reported a null or non-numeric
    value; such an entry is skipped on merge without affecting its siblings.
    """

    model_config = ConfigDict(extra="ignore")

    latency: Optional[int] = None
    endpoint: str = ""
    timestamp: Optional[int] = None

    @field_validator("latency", mode="before")
    @classmethod
    def _coerce_latency(cls, value):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        if isinstance(value, float):
            # fractional milliseconds; NaN and infinities are unusable
            return round(value) if math.isfinite(value) else None
        return value


class PassiveUpdate(RootModel[Dict[str, PassiveSample]]):
    """Provider name -> :class:`PassiveSample`, in arrival (insertion) order."""

    def items(self):
        return self.root.items()

    def __len__(self) -> int:
        return len(self.root)


__all__ = ["PassiveSample", "PassiveUpdate"]
