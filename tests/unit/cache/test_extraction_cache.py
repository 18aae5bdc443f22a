# tests/unit/cache/test_extraction_cache.py — v2
"""Tests for cache/extraction_cache.py — memory + durable write-through."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from caselens.cache.extraction_cache import ExtractionCache, meets_threshold
from caselens.cache.file_store import FileCacheStore
from caselens.cache.models import CacheEntry, Fingerprint

LONG_TEXT = "Order of the Tribunal. " * 10


@pytest.fixture
def fp() -> Fingerprint:
    return Fingerprint(base_name="order.pdf", byte_size=2048, modified_at_ms=1700000000000)


@pytest.fixture
def store(tmp_cache_dir):
    return FileCacheStore(cache_root=tmp_cache_dir)


class TestMeetsThreshold:
    def test_exactly_at_threshold(self):
        assert meets_threshold("a" * 100) is True

    def test_below_threshold(self):
        assert meets_threshold("a" * 99) is False

    def test_whitespace_not_counted(self):
        assert meets_threshold("   " + "a" * 99 + "\n\n\n") is False

    def test_none_and_empty(self):
        assert meets_threshold(None) is False
        assert meets_threshold("") is False

    def test_custom_threshold(self):
        assert meets_threshold("abc", min_chars=3) is True


class TestExtractionCache:
    @pytest.mark.asyncio
    async def test_miss(self, store, fp):
        cache = ExtractionCache(store=store)
        assert await cache.get(fp) is None

    @pytest.mark.asyncio
    async def test_put_then_get(self, store, fp):
        cache = ExtractionCache(store=store)
        assert await cache.put(fp, LONG_TEXT) is True
        assert await cache.get(fp) == LONG_TEXT
        assert fp in cache
        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_write_through_to_store(self, store, fp):
        cache = ExtractionCache(store=store)
        await cache.put(fp, LONG_TEXT)
        assert await store.get(fp.key) == LONG_TEXT

    @pytest.mark.asyncio
    async def test_short_text_not_cached(self, store, fp):
        cache = ExtractionCache(store=store)
        assert await cache.put(fp, "too short") is False
        assert await cache.get(fp) is None
        assert await store.list_keys() == []

    @pytest.mark.asyncio
    async def test_durable_hit_repopulates_memory(self, store, fp):
        await store.put(fp.key, LONG_TEXT)
        cache = ExtractionCache(store=store)
        assert fp not in cache
        assert await cache.get(fp) == LONG_TEXT
        assert fp in cache

    @pytest.mark.asyncio
    async def test_short_durable_entry_is_miss(self, store, fp):
        await store.put(fp.key, "stub")
        cache = ExtractionCache(store=store)
        assert await cache.get(fp) is None
        assert fp not in cache
        assert await store.list_keys() == []

    @pytest.mark.asyncio
    async def test_memory_only(self, fp):
        cache = ExtractionCache(store=None)
        await cache.put(fp, LONG_TEXT)
        assert await cache.get(fp) == LONG_TEXT

    @pytest.mark.asyncio
    async def test_memory_hit_skips_store(self, fp):
        store = AsyncMock()
        cache = ExtractionCache(store=store)
        await cache.put(fp, LONG_TEXT)
        await cache.get(fp)
        store.get_entry.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_read_failure_is_miss(self, fp):
        store = AsyncMock()
        store.get_entry.side_effect = OSError("disk gone")
        cache = ExtractionCache(store=store)
        assert await cache.get(fp) is None

    @pytest.mark.asyncio
    async def test_store_write_failure_keeps_memory(self, fp):
        store = AsyncMock()
        store.put.side_effect = OSError("read-only")
        cache = ExtractionCache(store=store)
        assert await cache.put(fp, LONG_TEXT) is True
        assert await cache.get(fp) == LONG_TEXT

    @pytest.mark.asyncio
    async def test_last_write_wins(self, store, fp):
        cache = ExtractionCache(store=store)
        await cache.put(fp, LONG_TEXT)
        await cache.put(fp, LONG_TEXT.upper())
        assert await cache.get(fp) == LONG_TEXT.upper()

    @pytest.mark.asyncio
    async def test_unusable_entry_delete_failure_is_miss(self, fp):
        store = AsyncMock()
        store.get_entry.return_value = CacheEntry(text="stub")
        store.delete.side_effect = OSError("read-only")
        cache = ExtractionCache(store=store)
        assert await cache.get(fp) is None
        store.delete.assert_awaited_once_with(fp.key)


class TestCachedSource:
    @pytest.mark.asyncio
    async def test_memory_entry_keeps_source(self, fp):
        cache = ExtractionCache()
        await cache.put(fp, LONG_TEXT, "cli-ocr")
        entry = await cache.get_entry(fp)
        assert entry == CacheEntry(text=LONG_TEXT, source="cli-ocr")

    @pytest.mark.asyncio
    async def test_durable_entry_keeps_source(self, store, fp):
        await ExtractionCache(store=store).put(fp, LONG_TEXT, "enhanced")
        fresh = ExtractionCache(store=store)
        entry = await fresh.get_entry(fp)
        assert entry.source == "enhanced"
        assert entry.text == LONG_TEXT

    @pytest.mark.asyncio
    async def test_default_source_is_native(self, fp):
        cache = ExtractionCache()
        await cache.put(fp, LONG_TEXT)
        assert (await cache.get_entry(fp)).source == "native"
