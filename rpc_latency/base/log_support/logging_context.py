"""Structured logging context object for engine events.

Defines :class:`LogContext`, a dataclass carrying the fields common to most
engine log events (network, provider, endpoint, run id, extra metadata). Its
``to_dict`` helper merges the ``extra`` mapping and prunes ``None`` values.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for engine logging events."""

    network: Optional[str] = None
    provider: Optional[str] = None
    endpoint: Optional[str] = None
    run_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
