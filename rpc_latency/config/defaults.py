"""rpc_latency.config.defaults
==========================

Central place for small, stable default values used across the rpc_latency
package. These defaults can be overridden via environment variables or an
external networks file, but provide sensible fallbacks for local use and
tests.

Module Purpose
--------------
- Provide a single import location for conservative default constants (no I/O).
- Keep the engine free of magic literals.

This module intentionally avoids importing from other rpc_latency packages to
prevent circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# ---- Measurement policy ----
# How long a stored snapshot stays usable (milliseconds, 5 minutes).
LATENCY_DATA_TTL_MS = 5 * 60 * 1000
# Maximum number of samples retained per provider.
SAMPLE_HISTORY_CAP = 10
# Hard per-probe timeout (milliseconds).
PROBE_TIMEOUT_MS = 5000
# Pause inserted between consecutive probes of one run (milliseconds).
INTER_PROBE_DELAY_MS = 300

# JSON-RPC body sent by every probe.
PROBE_RPC_METHOD = "eth_blockNumber"
PROBE_RPC_ID = 1


# ---- Storage keys ----
SNAPSHOT_KEY_PREFIX = "latency-results-"
PASSIVE_KEY_PREFIX = "blockheight-latency-"


# ---- Geo lookup ----
GEO_LOOKUP_URL = "https://ipapi.co/json/"
GEO_TIMEOUT_MS = 5000
GEO_UNKNOWN_LOCATION = "Unknown Location"


# ---- Latency tiers (milliseconds, exclusive upper bounds) ----
TIER_FAST_BELOW_MS = 100
TIER_MODERATE_BELOW_MS = 300


# ---- Built-in networks ----
# Ordered (provider, url) pairs; order is the probe order.
DEFAULT_NETWORKS = {
    "eth": [
        {"name": "Cloudflare", "url": "https://cloudflare-eth.com"},
        {"name": "LlamaNodes", "url": "https://eth.llamarpc.com"},
        {"name": "PublicNode", "url": "https://ethereum-rpc.publicnode.com"},
        {"name": "Ankr", "url": "https://rpc.ankr.com/eth"},
    ],
    "base": [
        {"name": "Base", "url": "https://mainnet.base.org"},
        {"name": "PublicNode", "url": "https://base-rpc.publicnode.com"},
    ],
    "arbitrum": [
        {"name": "Arbitrum", "url": "https://arb1.arbitrum.io/rpc"},
        {"name": "PublicNode", "url": "https://arbitrum-one-rpc.publicnode.com"},
    ],
}


# ---- SQLite config (infrastructure) ----
# Standard busy timeout to mitigate lock contention (milliseconds).
SQLITE_BUSY_TIMEOUT_MS = 5000
# Journal and sync mode optimized for local use and light concurrency.
SQLITE_JOURNAL_MODE = "WAL"
SQLITE_SYNCHRONOUS = "NORMAL"


__all__ = [
    # Measurement
    "LATENCY_DATA_TTL_MS",
    "SAMPLE_HISTORY_CAP",
    "PROBE_TIMEOUT_MS",
    "INTER_PROBE_DELAY_MS",
    "PROBE_RPC_METHOD",
    "PROBE_RPC_ID",
    # Keys
    "SNAPSHOT_KEY_PREFIX",
    "PASSIVE_KEY_PREFIX",
    # Geo
    "GEO_LOOKUP_URL",
    "GEO_TIMEOUT_MS",
    "GEO_UNKNOWN_LOCATION",
    # Tiers
    "TIER_FAST_BELOW_MS",
    "TIER_MODERATE_BELOW_MS",
    # Networks
    "DEFAULT_NETWORKS",
    # SQLite
    "SQLITE_BUSY_TIMEOUT_MS",
    "SQLITE_JOURNAL_MODE",
    "SQLITE_SYNCHRONOUS",
]
