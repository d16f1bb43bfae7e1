"""
Probe failure classification helpers.

Maps transport exceptions and HTTP statuses onto :class:`ErrorKind` values
and the fixed human-readable messages shown for each category. Rule order is
significant: the first matching rule wins.
"""
from __future__ import annotations

from typing import Any, Optional, Tuple

from .error_kind import ErrorKind
from .latency_error import TransportConnectionError, TransportTimeoutError

Classification = Tuple[ErrorKind, str]


def classify_exception(exc: BaseException) -> Classification:
    """Classify an exception raised while probing.

    Precedence:
        1. Transport timeout (including builtin ``TimeoutError``).
        2. Transport connect / fetch failure.
        3. ``UNKNOWN`` carrying the underlying error text.
    """
    if isinstance(exc, (TransportTimeoutError, TimeoutError)):
        return ErrorKind.TIMEOUT, "Connection timed out"
    if isinstance(exc, (TransportConnectionError, ConnectionError)):
        return ErrorKind.CONNECTION, "Connection failed"
    return ErrorKind.UNKNOWN, str(exc) or exc.__class__.__name__


def classify_http_status(status: int) -> Optional[Classification]:
    """Return the classification for a non-2xx status, ``None`` for 2xx."""
    if 200 <= status < 300:
        return None
    if status == 429:
        return ErrorKind.RATE_LIMIT, "Rate limit exceeded"
    if status >= 500:
        return ErrorKind.RPC_ERROR, "Server error"
    if status == 403:
        return ErrorKind.CONNECTION, "Access denied"
    return ErrorKind.UNKNOWN, f"HTTP error: {status}"


def classify_rpc_body(payload: Any) -> Optional[Classification]:
    """Return an RPC error classification when ``payload`` carries ``error``."""
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if not error:
        return None
    message = error.get("message") if isinstance(error, dict) else None
    return ErrorKind.RPC_ERROR, message or "RPC error"


__all__ = [
    "Classification",
    "classify_exception",
    "classify_http_status",
    "classify_rpc_body",
]
