"""Single timed JSON-RPC probe against one endpoint.

Each probe POSTs a fixed ``eth_blockNumber`` request and measures the time
from dispatch to response receipt on a monotonic clock. The outcome is
classified with the rules in ``rpc_latency.base.errors_parts.classification``
(first match wins):

1. transport timeout -> Timeout
2. transport connect failure -> Connection
3. HTTP 429 -> RateLimit, HTTP >= 500 -> RpcError, HTTP 403 -> Connection,
   other non-2xx -> Unknown
4. 2xx body carrying an ``error`` member -> RpcError
5. anything else -> Unknown with the underlying error text

The sampler never raises for probe failures; every outcome is returned as a
:class:`ProbeOutcome`.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional

from ..base.errors import ErrorKind, classify_exception, classify_http_status, classify_rpc_body
from ..base.interfaces import IHttpJsonClient
from ..base.log_support import LogContext
from ..base.logging import get_logger, log_event
from ..base.models import Endpoint, ProbeOutcome
from ..base.timeouts import get_timeout_config
from ..config.defaults import PROBE_RPC_ID, PROBE_RPC_METHOD

logger = get_logger(__name__)


def probe_body() -> Dict[str, Any]:
    """Return the JSON-RPC request sent by every probe."""
    return {"jsonrpc": "2.0", "method": PROBE_RPC_METHOD, "params": [], "id": PROBE_RPC_ID}


class Sampler:
    """Issues one probe per call; no retries."""

    def __init__(
        self,
        http: IHttpJsonClient,
        timeout_ms: Optional[int] = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the sampler.

        Args:
            http: JSON HTTP client used for the POST.
            timeout_ms: Hard per-probe deadline; defaults to the configured
                probe timeout.
            monotonic: Clock in seconds used for latency measurement.
        """
        self._http = http
        self._timeout_ms = timeout_ms
        self._monotonic = monotonic

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms if self._timeout_ms is not None else get_timeout_config().probe_timeout_ms

    def probe(self, endpoint: Endpoint) -> ProbeOutcome:
        ctx = LogContext(provider=endpoint.provider, endpoint=endpoint.url)
        log_event(logger, "probe.start", ctx, level=logging.DEBUG, timeout_ms=self.timeout_ms)
        outcome = self._probe(endpoint)
        log_event(
            logger,
            "probe.finish",
            ctx,
            ok=outcome.ok,
            latency_ms=outcome.latency,
            error_type=outcome.error_kind.value if outcome.error_kind else None,
            message=outcome.message,
        )
        return outcome

    def _probe(self, endpoint: Endpoint) -> ProbeOutcome:
        try:
            started = self._monotonic()
            reply = self._http.post_json(endpoint.url, probe_body(), self.timeout_ms)
            elapsed_ms = (self._monotonic() - started) * 1000
            latency = int(elapsed_ms + 0.5)  # half up
        except Exception as exc:  # classified below; a probe never raises
            kind, message = classify_exception(exc)
            return ProbeOutcome.failure(endpoint, kind, message)

        classified = classify_http_status(reply.status)
        if classified is not None:
            return ProbeOutcome.failure(endpoint, *classified)
        if reply.parse_error is not None:
            return ProbeOutcome.failure(endpoint, ErrorKind.UNKNOWN, reply.parse_error)
        classified = classify_rpc_body(reply.json)
        if classified is not None:
            return ProbeOutcome.failure(endpoint, *classified)
        return ProbeOutcome.success(endpoint, max(0, latency))


__all__ = ["Sampler", "probe_body"]
