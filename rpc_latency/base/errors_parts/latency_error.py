"""
Structured engine error exception types.

Wraps transport, storage and configuration failures with a normalized kind
for consistent handling and structured logging. None of these ever escape the
engine's public entry points; they are caught where a safe fallback exists.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_kind import ErrorKind


@dataclass
class LatencyError(Exception):
    """Represents a structured engine error.

    Attributes:
        kind: Probe-level :class:`ErrorKind` classification for the failure.
        message: Human-readable error message suitable for logging.
        network: Network identifier where the error originated, when known.
        raw: Optional original exception for diagnostics.
    """

    kind: ErrorKind
    message: str
    network: Optional[str] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining network, kind, and message."""
        return f"{self.network or '-'} {self.kind.value}: {self.message}"


class TransportTimeoutError(LatencyError):
    """The request did not complete before its deadline."""

    def __init__(self, message: str = "Connection timed out", raw: Optional[Exception] = None) -> None:
        super().__init__(kind=ErrorKind.TIMEOUT, message=message, raw=raw)


class TransportConnectionError(LatencyError):
    """The request could not be delivered (DNS, refused, reset, TLS...)."""

    def __init__(self, message: str = "Connection failed", raw: Optional[Exception] = None) -> None:
        super().__init__(kind=ErrorKind.CONNECTION, message=message, raw=raw)


class StorageParseError(LatencyError):
    """Stored data could not be decoded; callers treat it as a cache miss."""

    def __init__(self, key: str, raw: Optional[Exception] = None) -> None:
        super().__init__(kind=ErrorKind.UNKNOWN, message=f"malformed stored value for {key!r}", raw=raw)
        self.key = key


class ConfigMissingError(LatencyError):
    """No endpoint configuration exists for the requested network."""

    def __init__(self, network: str) -> None:
        super().__init__(kind=ErrorKind.UNKNOWN, message="unknown network", network=network)


__all__ = [
    "LatencyError",
    "TransportTimeoutError",
    "TransportConnectionError",
    "StorageParseError",
    "ConfigMissingError",
]
