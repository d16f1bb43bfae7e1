"""
Pydantic DTO for a per-provider latency record.

Purpose
-------
``ProviderRecord`` is the unit the engine persists, merges and reports. It is
serialized with camelCase aliases (``medianLatency``, ``errorMessage``,
``errorType``) so stored snapshots keep the established wire format, while
Python code uses snake_case attribute names.

Invariants
----------
- ``median_latency`` is ``None`` iff ``samples`` is empty.
- ``samples`` never holds more than the configured history cap; the reducers
  in ``rpc_latency.engine.aggregator`` enforce that bound.

Records are treated as immutable values: reducers return updated copies via
``model_copy`` instead of mutating in place.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, field_validator, model_validator

from ..errors import ErrorKind


class RecordStatus(str, Enum):
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class ProviderRecord(BaseModel):
    """Latency state for one provider within a network.

    Attributes:
        provider: Provider display name; unique within a snapshot.
        endpoint: URL the measurements refer to.
        latency: Most recently appended sample (not the median).
        median_latency: P50 of ``samples``.
        samples: Bounded FIFO history of recent samples, oldest first.
        status: ``loading`` | ``success`` | ``error``.
        error_message: Failure description when ``status`` is ``error``.
        error_type: Failure category when ``status`` is ``error``.
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=False)

    provider: str
    endpoint: str
    latency: Optional[NonNegativeInt] = None
    median_latency: Optional[Union[int, float]] = Field(default=None, alias="medianLatency")
    samples: List[NonNegativeInt] = Field(default_factory=list)
    status: RecordStatus = RecordStatus.LOADING
    error_message: Optional[str] = Field(default=None, alias="errorMessage")
    error_type: Optional[ErrorKind] = Field(default=None, alias="errorType")

    @field_validator("latency", mode="before")
    @classmethod
    def _round_latency(cls, value):
        # snapshots written elsewhere may hold fractional milliseconds
        return round(value) if isinstance(value, float) else value

    @field_validator("samples", mode="before")
    @classmethod
    def _round_samples(cls, value):
        if isinstance(value, (list, tuple)):
            return [round(v) if isinstance(v, float) else v for v in value]
        return value

    @model_validator(mode="after")
    def _check_median(self) -> "ProviderRecord":
        if (self.median_latency is None) != (not self.samples):
            raise ValueError("median_latency must be null exactly when samples is empty")
        return self

    @classmethod
    def loading(cls, provider: str, endpoint: str) -> "ProviderRecord":
        return cls(provider=provider, endpoint=endpoint, status=RecordStatus.LOADING)

    def to_wire(self) -> dict:
        """Return the camelCase JSON-ready mapping used in stored snapshots."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = ["ProviderRecord", "RecordStatus"]
