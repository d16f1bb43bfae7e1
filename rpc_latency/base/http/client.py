"""Process-wide pool of ``httpx.Client`` instances.

One client is kept per *purpose* (``"probe"``, ``"geo"``) so that
connections to the same hosts are reused across runs. Each client's default
timeout comes from :func:`get_timeout_config` for its purpose; requests may
still pass an explicit per-call timeout.

Clients are closed at interpreter exit. :func:`close_all_clients` empties the
pool on demand (tests use it between cases); the next request recreates the
client lazily.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
from typing import Dict, List

import httpx

from ..timeouts import get_timeout_config

_POOL: Dict[str, httpx.Client] = {}
_POOL_LOCK = threading.Lock()
_DEFAULT_HEADERS = {"Accept": "application/json"}


def _purpose_timeout(purpose: str) -> httpx.Timeout:
    cfg = get_timeout_config()
    ms = cfg.geo_timeout_ms if purpose == "geo" else cfg.probe_timeout_ms
    return httpx.Timeout(ms / 1000.0)


def get_httpx_client(purpose: str = "probe") -> httpx.Client:
    """Return the shared client for ``purpose``, creating it on first use.

    A client closed by its owner is replaced transparently.
    """
    with _POOL_LOCK:
        client = _POOL.get(purpose)
        if client is None or client.is_closed:
            client = httpx.Client(timeout=_purpose_timeout(purpose), headers=_DEFAULT_HEADERS)
            _POOL[purpose] = client
        return client


def close_all_clients() -> None:
    """Close every pooled client and empty the pool."""
    with _POOL_LOCK:
        clients: List[httpx.Client] = list(_POOL.values())
        _POOL.clear()
    for client in clients:
        with contextlib.suppress(Exception):
            client.close()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
