from __future__ import annotations

from typing import Optional

from .engine import create_connection, db_session, init_schema
from .kv_store import SqliteKeyValueStore


def open_store(db_path: Optional[str] = None) -> SqliteKeyValueStore:
    """Open (creating if needed) a SQLite-backed key-value store."""
    conn = create_connection(db_path)
    init_schema(conn)
    return SqliteKeyValueStore(conn)


__all__ = [
    "create_connection",
    "init_schema",
    "db_session",
    "SqliteKeyValueStore",
    "open_store",
]
