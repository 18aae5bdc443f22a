# src/cache/file_store.py — v3
"""Text file cache store (default CACHE_BACKEND=file).

Stores each entry as an individual UTF-8 ``<key>.txt`` file under CACHE_ROOT,
with the producing strategy in a ``<key>.source`` file beside it. Entries
without a source file read back as ``native``.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from caselens.cache.base_cache_store import DEFAULT_SOURCE, BaseCacheStore, coerce_source
from caselens.cache.fingerprint import safe_key
from caselens.cache.models import CacheEntry
from caselens.core.models import ExtractionSource

logger = logging.getLogger(__name__)


class FileCacheStore(BaseCacheStore):
    """File-based cache store, one text file per fingerprint."""

    def __init__(self, cache_root: Path | str) -> None:
        self._root = Path(cache_root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    async def get_entry(self, key: str) -> CacheEntry | None:
        """Retrieve cached text and source by key."""
        path = self._entry_path(key)
        if not path.exists():
            return None
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read cache entry %s: %s", key, e)
            return None
        return CacheEntry(text=text, source=self._read_source(key))

    async def put(self, key: str, text: str, source: ExtractionSource = DEFAULT_SOURCE) -> None:
        """Store text under key (overwrites)."""
        path = self._entry_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        await asyncio.to_thread(path.write_text, text, encoding="utf-8")
        await asyncio.to_thread(self._source_path(key).write_text, source, encoding="utf-8")

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        for path in (self._entry_path(key), self._source_path(key)):
            if path.exists():
                path.unlink()

    async def list_keys(self) -> list[str]:
        """List all cached keys."""
        if not self._root.is_dir():
            return []
        return sorted(p.stem for p in self._root.glob("*.txt"))

    def _read_source(self, key: str) -> ExtractionSource:
        path = self._source_path(key)
        try:
            return coerce_source(path.read_text(encoding="utf-8").strip())
        except (OSError, UnicodeDecodeError):
            return DEFAULT_SOURCE

    def _entry_path(self, key: str) -> Path:
        """Return file path for a cache key."""
        return self._root / f"{safe_key(key)}.txt"

    def _source_path(self, key: str) -> Path:
        return self._root / f"{safe_key(key)}.source"
