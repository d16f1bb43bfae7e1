"""
Engine Base Package

Exports collaborator contracts, value objects, DTOs, the error taxonomy and
timing configuration shared by the engine, persistence and service layers.

Layout:
- Interfaces: key-value store, HTTP JSON client, network configuration
- Models: immutable value objects (dataclasses)
- DTOs: persisted/streamed shapes (pydantic)
- Errors: probe error kinds and structured exceptions
"""

from .dto import PassiveSample, PassiveUpdate, ProviderRecord, RecordStatus, Snapshot
from .errors import ErrorKind, LatencyError
from .interfaces import IHttpJsonClient, IKeyValueStore, INetworkConfigProvider
from .models import Endpoint, GeoInfo, ProbeOutcome
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Models
    "Endpoint",
    "GeoInfo",
    "ProbeOutcome",
    # DTOs
    "PassiveSample",
    "PassiveUpdate",
    "ProviderRecord",
    "RecordStatus",
    "Snapshot",
    # Errors
    "ErrorKind",
    "LatencyError",
    # Interfaces
    "IHttpJsonClient",
    "IKeyValueStore",
    "INetworkConfigProvider",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
]
