"""Interface parts: one Protocol per module."""

from .http_json_client import IHttpJsonClient
from .key_value_store import ChangeCallback, IKeyValueStore, Unsubscribe
from .network_config_provider import INetworkConfigProvider

__all__ = [
    "IHttpJsonClient",
    "IKeyValueStore",
    "ChangeCallback",
    "Unsubscribe",
    "INetworkConfigProvider",
]
