"""One-line JSON rendering of log records.

:class:`JsonFormatter` emits ``ts``, ``level``, ``logger`` and ``msg`` for
every record. When the message is itself a JSON object (the shape produced by
``log_event``) its keys are merged into the line. Attributes passed through
``extra=`` are carried over; the standard ``LogRecord`` attributes are not.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def _utc_timestamp(created: float) -> str:
    return datetime.fromtimestamp(created, tz=timezone.utc).isoformat(timespec="milliseconds")


def _json_object(text: str) -> Dict[str, Any]:
    if not text.startswith("{"):
        return {}
    try:
        parsed = json.loads(text)
    except ValueError:
        return {}
    return parsed if isinstance(parsed, dict) else {}


class JsonFormatter(logging.Formatter):
    """Render records as compact JSON objects, one per line."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        entry: Dict[str, Any] = {
            "ts": _utc_timestamp(record.created),
            "level": record.levelname,
            "logger": record.name,
            "msg": message,
        }
        entry.update(_json_object(message))
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        for key, value in vars(record).items():
            if key in entry or key in _STANDARD_ATTRS or key.startswith("_"):
                continue
            entry[key] = value
        return json.dumps(entry, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter"]
