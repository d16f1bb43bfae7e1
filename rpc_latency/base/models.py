"""Engine value objects (dataclasses).

Re-exports the one-class-per-file implementations under
``rpc_latency.base.models_parts``. Persisted shapes (records, snapshots,
passive samples) are pydantic DTOs and live in ``rpc_latency.base.dto``.
"""

from .models_parts import Endpoint, GeoInfo, ProbeOutcome

__all__ = ["Endpoint", "GeoInfo", "ProbeOutcome"]
