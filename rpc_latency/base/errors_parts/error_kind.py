"""
Normalized probe error kinds (taxonomy).

Defines the `ErrorKind` enumeration attached to failed probe outcomes. Values
are the stable wire strings stored inside persisted snapshots and are
considered a public contract for presentation layers.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Enumerated probe failure categories."""

    TIMEOUT = "timeout"
    RATE_LIMIT = "rate-limit"
    CONNECTION = "connection"
    RPC_ERROR = "rpc-error"
    UNKNOWN = "unknown"


__all__ = ["ErrorKind"]
