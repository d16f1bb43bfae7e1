"""INetworkConfigProvider Protocol (single-class module)."""

from __future__ import annotations

from typing import Optional, Protocol, Tuple, runtime_checkable

from ..models_parts.endpoint import Endpoint


@runtime_checkable
class INetworkConfigProvider(Protocol):
    def endpoints_for(self, network_id: str) -> Optional[Tuple[Endpoint, ...]]:  # pragma: no cover - interface
        """Return the ordered endpoints of ``network_id`` or ``None`` if unknown."""
        ...


__all__ = ["INetworkConfigProvider"]
