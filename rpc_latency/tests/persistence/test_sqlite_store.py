"""SQLite key-value store: persistence, versioning and change polling."""

from __future__ import annotations

import sqlite3

from rpc_latency.base.interfaces import IKeyValueStore
from rpc_latency.persistence.sqlite import create_connection, db_session, init_schema, open_store
from rpc_latency.persistence.sqlite.engine import get_db_path


def test_schema_creates_kv_table(tmp_path):
    conn = create_connection(str(tmp_path / "s.db"))
    try:
        init_schema(conn)
        cols = {row["name"] for row in conn.execute("PRAGMA table_info(kv)")}
        assert {"key", "value", "version", "updated_at"} <= cols  # nosec B101
        mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
        assert mode.lower() == "wal"  # nosec B101
    finally:
        conn.close()


def test_get_db_path_expands_user(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert str(get_db_path("~/x.db")).startswith(str(tmp_path))  # nosec B101


def test_set_get_roundtrip_and_version_bump(tmp_path):
    store = open_store(str(tmp_path / "s.db"))
    try:
        assert isinstance(store, IKeyValueStore)  # nosec B101
        assert store.get("k") is None  # nosec B101
        store.set("k", "v1")
        store.set("k", "v2")
        assert store.get("k") == "v2"  # nosec B101
        version = store.conn.execute("SELECT version FROM kv WHERE key='k'").fetchone()[0]
        assert version == 2  # nosec B101
    finally:
        store.conn.close()


def test_value_visible_to_second_connection(tmp_path):
    path = str(tmp_path / "s.db")
    writer, reader = open_store(path), open_store(path)
    try:
        writer.set("latency-results-eth", '{"results": [], "timestamp": 1}')
        assert reader.get("latency-results-eth") == '{"results": [], "timestamp": 1}'  # nosec B101
    finally:
        writer.conn.close()
        reader.conn.close()


def test_poll_changes_reports_external_writes_only(tmp_path):
    path = str(tmp_path / "s.db")
    local, remote = open_store(path), open_store(path)
    try:
        seen = []
        local.subscribe("blockheight-latency-eth", lambda key, value: seen.append(value))
        assert local.poll_changes() == []  # nosec B101

        local.set("blockheight-latency-eth", "own")
        assert local.poll_changes() == []  # nosec B101

        remote.set("blockheight-latency-eth", "external")
        assert local.poll_changes() == ["blockheight-latency-eth"]  # nosec B101
        assert seen == ["external"]  # nosec B101
        assert local.poll_changes() == []  # nosec B101
    finally:
        local.conn.close()
        remote.conn.close()


def test_unsubscribed_keys_are_not_polled(tmp_path):
    path = str(tmp_path / "s.db")
    local, remote = open_store(path), open_store(path)
    try:
        seen = []
        unsubscribe = local.subscribe("k", lambda key, value: seen.append(value))
        unsubscribe()
        remote.set("k", "v")
        assert local.poll_changes() == []  # nosec B101
        assert seen == []  # nosec B101
    finally:
        local.conn.close()
        remote.conn.close()


def test_db_session_commits_and_closes(tmp_path):
    path = str(tmp_path / "s.db")
    with db_session(path) as conn:
        conn.execute("INSERT INTO kv(key, value) VALUES('a', '1')")
    check = sqlite3.connect(path)
    try:
        assert check.execute("SELECT value FROM kv WHERE key='a'").fetchone()[0] == "1"  # nosec B101
    finally:
        check.close()
