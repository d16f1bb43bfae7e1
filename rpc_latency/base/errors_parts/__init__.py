"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `rpc_latency.base.errors` for the stable surface.
"""

from .error_kind import ErrorKind
from .latency_error import (
    ConfigMissingError,
    LatencyError,
    StorageParseError,
    TransportConnectionError,
    TransportTimeoutError,
)
from .classification import classify_exception, classify_http_status, classify_rpc_body

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
