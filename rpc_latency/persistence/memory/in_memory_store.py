"""In-memory implementation of IKeyValueStore.

Simple reference implementation backed by a dictionary. Suitable for tests,
single-process hosts, and as the default store when no database path is
configured.

Thread safety: reads and writes are guarded by a lock; subscriber callbacks
run outside the lock, on the writer's thread, in registration order.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional

from ...base.interfaces import ChangeCallback, Unsubscribe
from ...base.logging import get_logger

logger = get_logger(__name__)


class InMemoryKeyValueStore:
    """Dictionary-backed key-value store with change notification.

    Every :meth:`set` that changes a value notifies the subscribers of that
    key. The engine never subscribes to keys it writes itself, so writes made
    by the engine do not loop back into it.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})
        self._subscribers: Dict[str, List[ChangeCallback]] = {}
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            changed = self._values.get(key) != value
            self._values[key] = value
            callbacks = list(self._subscribers.get(key, ())) if changed else []
        for callback in callbacks:
            try:
                callback(key, value)
            except Exception:  # subscriber failures must not break the writer
                logger.exception("store.subscriber_error key=%s", key)

    def delete(self, key: str) -> None:
        with self._lock:
            self._values.pop(key, None)

    def subscribe(self, key: str, callback: ChangeCallback) -> Unsubscribe:
        with self._lock:
            self._subscribers.setdefault(key, []).append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(key, [])
                if callback in callbacks:
                    callbacks.remove(callback)

        return _unsubscribe

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._values)


__all__ = ["InMemoryKeyValueStore"]
