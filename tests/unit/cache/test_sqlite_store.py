# tests/unit/cache/test_sqlite_store.py — v3
"""Tests for cache/sqlite_store.py — full functional tests (stdlib sqlite3)."""

from __future__ import annotations

import sqlite3

import pytest

from caselens.cache.sqlite_store import SqliteCacheStore


@pytest.fixture
def store(tmp_path):
    s = SqliteCacheStore(db_path=tmp_path / "db" / "test_cache.db")
    yield s
    s.close()


class TestSqliteCacheStore:
    def test_creates_parent_dir(self, tmp_path, store):
        assert (tmp_path / "db" / "test_cache.db").exists()

    @pytest.mark.asyncio
    async def test_put_and_get(self, store):
        await store.put("key1", "Extracted text")
        assert await store.get("key1") == "Extracted text"

    @pytest.mark.asyncio
    async def test_get_missing(self, store):
        assert await store.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_upsert(self, store):
        await store.put("key1", "old")
        await store.put("key1", "new")
        assert await store.get("key1") == "new"
        assert await store.list_keys() == ["key1"]

    @pytest.mark.asyncio
    async def test_delete(self, store):
        await store.put("key1", "text")
        await store.delete("key1")
        assert await store.get("key1") is None

    @pytest.mark.asyncio
    async def test_list_keys_sorted(self, store):
        await store.put("b", "1")
        await store.put("a", "2")
        assert await store.list_keys() == ["a", "b"]

    @pytest.mark.asyncio
    async def test_persists_across_connections(self, tmp_path):
        db = tmp_path / "persist.db"
        first = SqliteCacheStore(db_path=db)
        await first.put("k", "durable")
        first.close()
        second = SqliteCacheStore(db_path=db)
        try:
            assert await second.get("k") == "durable"
        finally:
            second.close()


class TestEntrySource:
    @pytest.mark.asyncio
    async def test_source_roundtrip(self, store):
        await store.put("k", "text", "cli-ocr")
        entry = await store.get_entry("k")
        assert entry.text == "text"
        assert entry.source == "cli-ocr"

    @pytest.mark.asyncio
    async def test_default_source(self, store):
        await store.put("k", "text")
        assert (await store.get_entry("k")).source == "native"

    @pytest.mark.asyncio
    async def test_database_without_source_column_upgraded(self, tmp_path):
        db = tmp_path / "legacy.db"
        conn = sqlite3.connect(str(db))
        conn.execute(
            "CREATE TABLE extracted_text (key TEXT PRIMARY KEY, text TEXT NOT NULL, "
            "created_at TEXT DEFAULT CURRENT_TIMESTAMP)"
        )
        conn.execute("INSERT INTO extracted_text (key, text) VALUES ('k', 'legacy')")
        conn.commit()
        conn.close()

        store = SqliteCacheStore(db_path=db)
        try:
            entry = await store.get_entry("k")
            assert entry.text == "legacy"
            assert entry.source == "native"
            await store.put("k2", "new", "enhanced")
            assert (await store.get_entry("k2")).source == "enhanced"
        finally:
            store.close()
