"""Formatter and context object backing ``rpc_latency.base.logging``."""

from .json_formatter import JsonFormatter
from .logging_context import LogContext

__all__ = ["JsonFormatter", "LogContext"]
