"""SQLite-backed implementation of ``IKeyValueStore``.

Values live in the ``kv`` table with a per-key ``version`` counter. Unlike
the repositories of a unit-of-work design, every :meth:`set` commits
immediately so that other connections observe it.

Change notification
-------------------
SQLite has no push channel, so subscribers are fed by polling:
:meth:`poll_changes` compares each watched key's stored version against the
last version this instance saw and notifies subscribers of keys that changed.
Writes made through this instance update the seen version and therefore do
not notify; only external modifications do. Hosts call ``poll_changes`` on
their own cadence (a timer thread, an event loop tick, a request hook).
"""

from __future__ import annotations

import sqlite3
import threading
from typing import Dict, List, Optional

from ...base.interfaces import ChangeCallback, Unsubscribe
from ...base.logging import get_logger

logger = get_logger(__name__)


class SqliteKeyValueStore:
    """Durable key-value store with poll-based change notification."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialize the store.

        Parameters
        ----------
        conn:
            Open connection whose schema was created by ``init_schema``.
        """
        self.conn = conn
        self._lock = threading.RLock()
        self._subscribers: Dict[str, List[ChangeCallback]] = {}
        self._seen_versions: Dict[str, int] = {}

    def _row(self, key: str) -> Optional[sqlite3.Row]:
        return self.conn.execute("SELECT value, version FROM kv WHERE key = ?", (key,)).fetchone()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            row = self._row(key)
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self.conn.execute(
                "INSERT INTO kv(key, value, version, updated_at) VALUES(?, ?, 1, CURRENT_TIMESTAMP) "
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value, version=kv.version + 1, updated_at=CURRENT_TIMESTAMP",
                (key, value),
            )
            self.conn.commit()
            row = self._row(key)
            if row is not None:
                self._seen_versions[key] = int(row["version"])

    def subscribe(self, key: str, callback: ChangeCallback) -> Unsubscribe:
        with self._lock:
            self._subscribers.setdefault(key, []).append(callback)
            if key not in self._seen_versions:
                row = self._row(key)
                self._seen_versions[key] = int(row["version"]) if row else 0

        def _unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(key, [])
                if callback in callbacks:
                    callbacks.remove(callback)

        return _unsubscribe

    def poll_changes(self) -> List[str]:
        """Notify subscribers of watched keys modified elsewhere.

        Returns
        -------
        List[str]
            Keys whose subscribers were notified, in subscription order.
        """
        pending: List[tuple[str, str, List[ChangeCallback]]] = []
        with self._lock:
            for key, callbacks in self._subscribers.items():
                if not callbacks:
                    continue
                row = self._row(key)
                if row is None:
                    continue
                version = int(row["version"])
                if version == self._seen_versions.get(key, 0):
                    continue
                self._seen_versions[key] = version
                pending.append((key, row["value"], list(callbacks)))
        for key, value, callbacks in pending:
            for callback in callbacks:
                try:
                    callback(key, value)
                except Exception:  # subscriber failures must not stop polling
                    logger.exception("store.subscriber_error key=%s", key)
        return [key for key, _, _ in pending]


__all__ = ["SqliteKeyValueStore"]
