"""
ProbeOutcome: tagged result of a single Sampler invocation.

Exactly one of ``latency`` and ``error_kind`` is populated. Construct
instances through :meth:`ProbeOutcome.success` and :meth:`ProbeOutcome.failure`
rather than the raw constructor.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import ErrorKind
from .endpoint import Endpoint


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of probing one endpoint.

    Attributes:
        endpoint: The probed endpoint.
        latency: Round-trip milliseconds on success, ``None`` on failure.
        error_kind: Failure category, ``None`` on success.
        message: Human-readable failure description, ``None`` on success.
    """

    endpoint: Endpoint
    latency: Optional[int] = None
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.latency is None) == (self.error_kind is None):
            raise ValueError("ProbeOutcome requires exactly one of latency or error_kind")
        if self.latency is not None and self.latency < 0:
            raise ValueError("latency must be non-negative")

    @classmethod
    def success(cls, endpoint: Endpoint, latency: int) -> "ProbeOutcome":
        return cls(endpoint=endpoint, latency=latency)

    @classmethod
    def failure(cls, endpoint: Endpoint, kind: ErrorKind, message: str) -> "ProbeOutcome":
        return cls(endpoint=endpoint, error_kind=kind, message=message)

    @property
    def ok(self) -> bool:
        return self.error_kind is None


__all__ = ["ProbeOutcome"]
