"""Structured logging for the latency engine.

Every engine module logs through a child of the shared ``rpc_latency``
logger. The shared logger owns exactly one console handler (stderr) and,
optionally, one rotating file handler attached by :func:`configure_logger`.
Children carry no handlers and simply propagate.

Events are JSON objects produced by :func:`log_event`; the
:class:`JsonFormatter` hoists their keys onto the emitted line.

Environment:
    RPC_LATENCY_LOG_LEVEL  level name applied to the shared logger and its
                           console handler (e.g. ``DEBUG``), overriding the
                           level requested in code.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Iterable, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "rpc_latency"
LOG_LEVEL_ENV = "RPC_LATENCY_LOG_LEVEL"

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}

# markers set on objects this module owns
_READY = "_rpc_latency_ready"
_CONSOLE = "_rpc_latency_console"
_ROTATING = "_rpc_latency_rotating"

_FILE_MAX_BYTES = 10 * 1024 * 1024
_FILE_BACKUPS = 5


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _resolve_level(value: int | str | None, fallback: int = logging.INFO) -> int:
    """Turn a numeric level or level name into an ``int``; unknown names give ``fallback``."""
    if value is None or value == "":
        return fallback
    if isinstance(value, int):
        return value
    name = value.strip().upper()
    name = _LEVEL_ALIASES.get(name, name)
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else fallback


def _owned(handlers: Iterable[logging.Handler], marker: str) -> list[logging.Handler]:
    return [h for h in handlers if getattr(h, marker, False)]


def _close_quietly(logger: logging.Logger, handler: logging.Handler) -> None:
    logger.removeHandler(handler)
    with contextlib.suppress(Exception):
        handler.close()


class _StderrHandler(logging.StreamHandler):
    """Stream handler that writes to whatever ``sys.stderr`` is at emit time.

    Same lookup as :data:`logging.lastResort`, so a swapped ``sys.stderr``
    (test capture, host redirection) is picked up without rebinding.
    """

    def __init__(self) -> None:
        logging.Handler.__init__(self)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def _new_console(json_mode: bool, level: int) -> logging.Handler:
    handler = _StderrHandler()
    handler.setLevel(level)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _CONSOLE, True)
    return handler


def _sync_console(logger: logging.Logger, json_mode: bool, level: int) -> None:
    """Bring console handlers in line with the requested level and format."""
    for handler in _owned(logger.handlers, _CONSOLE):
        if not isinstance(handler, _StderrHandler):
            _close_quietly(logger, handler)
            logger.addHandler(_new_console(json_mode, level))
            continue
        handler.setLevel(level)
        if isinstance(handler.formatter, JsonFormatter) != json_mode:
            handler.setFormatter(_formatter(json_mode))


def _base_logger(json_mode: bool, level: int) -> logging.Logger:
    base = logging.getLogger(BASE_LOGGER_NAME)
    effective = _resolve_level(os.getenv(LOG_LEVEL_ENV), fallback=level)
    base.setLevel(effective)
    if getattr(base, _READY, False):
        _sync_console(base, json_mode, effective)
        return base

    base.handlers[:] = [_new_console(json_mode, effective)]
    base.propagate = False
    setattr(base, _READY, True)
    return base


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name``'s logger, initializing the shared ``rpc_latency`` handler once.

    Loggers outside the ``rpc_latency`` hierarchy are returned untouched apart
    from having any stray console handler from this module removed.
    """
    base = _base_logger(json_mode, level)
    if name == BASE_LOGGER_NAME:
        return base
    child = logging.getLogger(name)
    for handler in _owned(child.handlers, _CONSOLE):
        _close_quietly(child, handler)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the shared logger at runtime.

    Parameters
    ----------
    level:
        New level (number or name). ``None`` keeps the current level.
    file_path:
        Attach a rotating file handler writing to this path (parent
        directories are created). ``None`` detaches any file handler this
        function attached earlier.
    json_mode:
        Formatter used for the file handler.

    Returns
    -------
    logging.Logger
        The shared ``rpc_latency`` logger.
    """
    base = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)
    if level is not None:
        base.setLevel(_resolve_level(level, fallback=base.level))
        for handler in base.handlers:
            handler.setLevel(base.level)

    rotating = _owned(base.handlers, _ROTATING)
    if file_path is None:
        for handler in rotating:
            _close_quietly(base, handler)
        return base

    target = os.path.abspath(os.path.expanduser(file_path))
    keep: Optional[logging.Handler] = None
    for handler in rotating:
        if keep is None and getattr(handler, "baseFilename", None) == target:
            keep = handler
        else:
            _close_quietly(base, handler)

    if keep is None:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        keep = RotatingFileHandler(target, maxBytes=_FILE_MAX_BYTES, backupCount=_FILE_BACKUPS, encoding="utf-8")
        setattr(keep, _ROTATING, True)
        base.addHandler(keep)
    keep.setFormatter(_formatter(json_mode))
    keep.setLevel(base.level)
    return base


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit ``event`` as one JSON log line.

    ``ctx`` contributes network/provider/endpoint/run identifiers. Fields
    whose value is ``None`` are dropped unless ``keep_none`` is set.
    """
    if not logger.isEnabledFor(level):
        return
    payload: dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    payload.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


__all__ = [
    "BASE_LOGGER_NAME",
    "LOG_LEVEL_ENV",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
]
