"""``IHttpJsonClient`` implementation on top of ``httpx``.

Translates httpx transport exceptions into the engine taxonomy so callers
never depend on httpx types:

- ``httpx.TimeoutException`` -> :class:`TransportTimeoutError`
- any other ``httpx.TransportError`` -> :class:`TransportConnectionError`

Non-2xx responses are not errors at this layer; they are returned as
:class:`HttpReply` values for the caller to classify.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx

from ..errors import TransportConnectionError, TransportTimeoutError
from .client import get_httpx_client
from .reply import HttpReply

_JSON_HEADERS = {"Content-Type": "application/json"}


def _decode(response: httpx.Response) -> HttpReply:
    try:
        payload = response.json()
    except ValueError as exc:
        return HttpReply(status=response.status_code, parse_error=str(exc) or "invalid JSON body")
    return HttpReply(status=response.status_code, json=payload)


class HttpxJsonClient:
    """JSON request helper bound to a (pooled or injected) ``httpx.Client``."""

    def __init__(self, client: Optional[httpx.Client] = None, purpose: str = "probe") -> None:
        """Initialize the adapter.

        Args:
            client: Explicit client (tests pass one built on ``httpx.MockTransport``).
                When omitted, a pooled client keyed by ``purpose`` is used.
            purpose: Pool discriminator for :func:`get_httpx_client`.
        """
        self._client = client
        self._purpose = purpose

    @property
    def client(self) -> httpx.Client:
        return self._client if self._client is not None else get_httpx_client(self._purpose)

    def _send(self, method: str, url: str, timeout_ms: int, body: Any = None) -> HttpReply:
        timeout = timeout_ms / 1000.0
        try:
            if body is None:
                response = self.client.request(method, url, timeout=timeout)
            else:
                response = self.client.request(method, url, json=body, headers=_JSON_HEADERS, timeout=timeout)
        except httpx.TimeoutException as exc:
            raise TransportTimeoutError(raw=exc) from exc
        except httpx.TransportError as exc:
            raise TransportConnectionError(raw=exc) from exc
        return _decode(response)

    def post_json(self, url: str, body: Mapping[str, Any], timeout_ms: int) -> HttpReply:
        return self._send("POST", url, timeout_ms, dict(body))

    def get_json(self, url: str, timeout_ms: int) -> HttpReply:
        return self._send("GET", url, timeout_ms)


__all__ = ["HttpxJsonClient"]
