"""Connection and schema helpers for the SQLite key-value store.

Connections are opened in WAL mode with a busy timeout so several processes
(a host UI and a background monitor, say) can share one store file. Pragma
values live in ``rpc_latency.config.defaults``. Nothing here runs at import
time.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Tuple

from ...config.defaults import (
    SQLITE_BUSY_TIMEOUT_MS,
    SQLITE_JOURNAL_MODE,
    SQLITE_SYNCHRONOUS,
)

DEFAULT_DB_PATH = Path.home() / ".rpc_latency" / "store.db"

_PRAGMAS: Tuple[Tuple[str, object], ...] = (
    ("journal_mode", SQLITE_JOURNAL_MODE),
    ("synchronous", SQLITE_SYNCHRONOUS),
    ("busy_timeout", SQLITE_BUSY_TIMEOUT_MS),
)

_KV_DDL = """
CREATE TABLE IF NOT EXISTS kv (
    key        TEXT PRIMARY KEY,
    value      TEXT NOT NULL,
    version    INTEGER NOT NULL DEFAULT 1,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""


def get_db_path(db_path: Optional[str] = None) -> Path:
    """Resolve ``db_path`` (``~`` expanded) or fall back to ``DEFAULT_DB_PATH``."""
    if not db_path:
        return DEFAULT_DB_PATH
    return Path(db_path).expanduser()


def create_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Open the store database, creating its directory if needed.

    The returned connection is usable from any thread; callers serialize
    statements themselves (``SqliteKeyValueStore`` holds a lock). Rows come
    back as ``sqlite3.Row``.
    """
    path = get_db_path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    for name, value in _PRAGMAS:
        conn.execute(f"PRAGMA {name}={value}")
    return conn


def init_schema(conn: sqlite3.Connection) -> None:
    """Ensure the ``kv`` table exists.

    ``version`` increases on every write to a key and lets a reader notice
    writes made through other connections.
    """
    conn.execute(_KV_DDL)
    conn.commit()


@contextmanager
def db_session(db_path: Optional[str] = None) -> Iterator[sqlite3.Connection]:
    """Yield a schema-ready connection; commit on success, roll back on error, always close."""
    conn = create_connection(db_path)
    try:
        init_schema(conn)
        yield conn
    except BaseException:
        conn.rollback()
        raise
    else:
        conn.commit()
    finally:
        conn.close()


__all__ = ["DEFAULT_DB_PATH", "get_db_path", "create_connection", "init_schema", "db_session"]
