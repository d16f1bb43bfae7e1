"""IHttpJsonClient Protocol (single-class module).

Transport-level failures are raised as ``TransportTimeoutError`` or
``TransportConnectionError``; HTTP-level failures are returned as statuses.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from ..http.reply import HttpReply


@runtime_checkable
class IHttpJsonClient(Protocol):
    def post_json(self, url: str, body: Mapping[str, Any], timeout_ms: int) -> HttpReply:  # pragma: no cover - interface
        """POST ``body`` as JSON and return the status plus decoded payload."""
        ...

    def get_json(self, url: str, timeout_ms: int) -> HttpReply:  # pragma: no cover - interface
        """GET ``url`` and return the status plus decoded payload."""
        ...


__all__ = ["IHttpJsonClient"]
