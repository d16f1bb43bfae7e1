"""Engine-facing collaborator contracts.

Re-exports the Protocols under ``rpc_latency.base.interfaces_parts``. The
engine depends only on these abstractions; concrete adapters live in
``rpc_latency.base.http`` and ``rpc_latency.persistence``.
"""

from .interfaces_parts import (
    ChangeCallback,
    IHttpJsonClient,
    IKeyValueStore,
    INetworkConfigProvider,
    Unsubscribe,
)

__all__ = [
    "IHttpJsonClient",
    "IKeyValueStore",
    "ChangeCallback",
    "Unsubscribe",
    "INetworkConfigProvider",
]
