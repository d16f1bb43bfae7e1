"""Unified engine error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``rpc_latency.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_kind import ErrorKind
from .errors_parts.latency_error import (
    ConfigMissingError,
    LatencyError,
    StorageParseError,
    TransportConnectionError,
    TransportTimeoutError,
)
from .errors_parts.classification import (
    classify_exception,
    classify_http_status,
    classify_rpc_body,
)

__all__ = [
    "ErrorKind",
    "LatencyError",
    "TransportTimeoutError",
    "TransportConnectionError",
    "StorageParseError",
    "ConfigMissingError",
    "classify_exception",
    "classify_http_status",
    "classify_rpc_body",
]
