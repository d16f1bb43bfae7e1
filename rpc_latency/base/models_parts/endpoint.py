"""
Endpoint value object identifying one provider's RPC address.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Endpoint:
    """Immutable (provider, url) pair supplied by network configuration.

    Attributes:
        provider: Display name of the operator of the endpoint.
        url: Absolute JSON-RPC URL probed with a POST request.
    """

    provider: str
    url: str


__all__ = ["Endpoint"]
