"""Unified network configuration layer.

Goals
-----
* Centralize the endpoint lists probed for each network.
* Merge sources in a predictable order:
    1. Built-in defaults (``DEFAULT_NETWORKS``)
    2. Optional external config file (JSON or YAML) pointed to by
       ``RPC_LATENCY_NETWORKS_FILE``
    3. In-code overrides passed to the helper
* Keep zero hard dependency on PyYAML (load YAML only if available).

External Config File (Optional)
-------------------------------
JSON is attempted first; if that fails and PyYAML is installed, YAML is
attempted. A network section replaces the built-in list for that network
wholesale. Structure example:

```
eth:
  - name: Cloudflare
    url: https://cloudflare-eth.com
  - name: MyNode
    url: https://rpc.example.org
```

Public API
----------
* get_networks_config(overrides: dict | None = None) -> dict
* StaticNetworkConfig: ``INetworkConfigProvider`` over a merged mapping
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..base.models import Endpoint
from .defaults import DEFAULT_NETWORKS

try:  # Optional YAML support
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    yaml = None  # type: ignore

NETWORKS_FILE_ENV = "RPC_LATENCY_NETWORKS_FILE"

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv(NETWORKS_FILE_ENV)
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    _FILE_CACHE_PATH = path
    if not path or not Path(path).exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    data: Any = {}
    try:
        data = json.loads(text)
    except ValueError:
        if yaml is not None:  # pragma: no cover (depends on optional lib)
            try:
                data = yaml.safe_load(text) or {}
            except yaml.YAMLError:
                data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = data
    return data


def _normalize_entries(entries: Iterable[Any]) -> List[Dict[str, str]]:
    """Keep only well-formed ``{"name", "url"}`` entries, preserving order."""
    out: List[Dict[str, str]] = []
    for entry in entries or []:
        if not isinstance(entry, Mapping):
            continue
        name, url = entry.get("name"), entry.get("url")
        if isinstance(name, str) and isinstance(url, str) and name and url:
            out.append({"name": name, "url": url})
    return out


def get_networks_config(overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, List[Dict[str, str]]]:
    """Return the merged network -> endpoint list mapping.

    Merge order (later wins per network): defaults -> external file -> overrides.
    Network identifiers are normalized to lowercase.
    """
    cfg: Dict[str, List[Dict[str, str]]] = {}
    for source in (DEFAULT_NETWORKS, _load_external_config(), overrides or {}):
        for network_id, entries in source.items():
            if isinstance(entries, list):
                cfg[str(network_id).lower().strip()] = _normalize_entries(entries)
    return cfg


class StaticNetworkConfig:
    """``INetworkConfigProvider`` over an in-memory network mapping."""

    def __init__(self, networks: Optional[Mapping[str, Iterable[Mapping[str, str]]]] = None) -> None:
        source = get_networks_config() if networks is None else networks
        self._networks: Dict[str, Tuple[Endpoint, ...]] = {
            str(k).lower().strip(): tuple(Endpoint(provider=e["name"], url=e["url"]) for e in _normalize_entries(v))
            for k, v in source.items()
        }

    def endpoints_for(self, network_id: str) -> Optional[Tuple[Endpoint, ...]]:
        return self._networks.get((network_id or "").lower().strip())


__all__ = [
    "get_networks_config",
    "StaticNetworkConfig",
    "NETWORKS_FILE_ENV",
    "DEFAULT_NETWORKS",
]
