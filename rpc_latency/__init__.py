"""rpc_latency package

Latency probing and aggregation engine for blockchain JSON-RPC providers.

Purpose:
    Measure round-trip latency of every configured RPC endpoint of a network,
    keep a bounded per-provider history with a median, persist timestamped
    snapshots with a freshness window, and fold in latency samples produced
    by an external passive monitor.

Public API (re-exported):
    - Version: ``__version__``
    - Service: :class:`LatencyService`, :func:`create`
    - DTOs: :class:`ProviderRecord`, :class:`Snapshot`, :class:`RecordStatus`
    - Errors: :class:`ErrorKind`, :class:`LatencyError`
    - Wiring: :class:`LatencyContainer`, :func:`build_container`
"""

from typing import Any, Dict, Optional

from .base.dto import PassiveSample, PassiveUpdate, ProviderRecord, RecordStatus, Snapshot
from .base.errors import ErrorKind, LatencyError
from .base.models import Endpoint, GeoInfo
from .di import LatencyContainer, build_container
from .engine import LatencyTier, latency_tier
from .service import LatencyService

__version__ = "0.1.0"


def create(config: Optional[Dict[str, Any]] = None) -> LatencyService:
    """Return a fully wired :class:`LatencyService`.

    Example:
        >>> service = create({"db_path": "~/.rpc_latency/store.db"})
        >>> snapshot = service.run_latency_test("eth")
    """
    return build_container(config).service()


__all__ = [
    # Version
    "__version__",
    # Service
    "LatencyService",
    "create",
    # DTOs / models
    "Endpoint",
    "GeoInfo",
    "PassiveSample",
    "PassiveUpdate",
    "ProviderRecord",
    "RecordStatus",
    "Snapshot",
    "LatencyTier",
    "latency_tier",
    # Errors
    "ErrorKind",
    "LatencyError",
    # Wiring
    "LatencyContainer",
    "build_container",
]
