"""DI container for the latency engine.

Acts as the composition root hosts use to obtain a wired
:class:`~rpc_latency.service.LatencyService`.
"""
from __future__ import annotations

from .container import LatencyContainer, build_container

__all__ = ["LatencyContainer", "build_container"]
