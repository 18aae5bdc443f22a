# src/cache/extraction_cache.py — v2
"""Two-level (memory + durable) cache of extracted document text.

Write-through: put() updates the in-process map and the durable store;
get() checks memory first, then the durable store, repopulating memory on
a hit. Only text that clears the minimum length is ever stored, so a
failed or low-quality extraction never short-circuits a retry. Each entry
remembers the strategy that produced it.
"""

from __future__ import annotations

import logging

from caselens.cache.base_cache_store import DEFAULT_SOURCE, BaseCacheStore
from caselens.cache.models import CacheEntry, Fingerprint
from caselens.core.models import ExtractionSource

logger = logging.getLogger(__name__)

DEFAULT_MIN_CHARS = 100


def meets_threshold(text: str | None, min_chars: int = DEFAULT_MIN_CHARS) -> bool:
    """True if the stripped text is long enough to be considered usable."""
    return bool(text) and len(text.strip()) >= min_chars


class ExtractionCache:
    """Fingerprint-keyed text cache, constructed once per process."""

    def __init__(
        self,
        store: BaseCacheStore | None = None,
        min_chars: int = DEFAULT_MIN_CHARS,
    ) -> None:
        self._memory: dict[str, CacheEntry] = {}
        self._store = store
        self._min_chars = min_chars

    def __len__(self) -> int:
        return len(self._memory)

    def __contains__(self, fingerprint: Fingerprint) -> bool:
        return fingerprint.key in self._memory

    async def get(self, fingerprint: Fingerprint) -> str | None:
        """Return cached text for a fingerprint, or None on a miss."""
        entry = await self.get_entry(fingerprint)
        return entry.text if entry is not None else None

    async def get_entry(self, fingerprint: Fingerprint) -> CacheEntry | None:
        """Return cached text and its source, or None on a miss."""
        key = fingerprint.key
        entry = self._memory.get(key)
        if entry is not None:
            logger.debug("Memory cache hit for %s", key)
            return entry

        if self._store is None:
            return None

        try:
            entry = await self._store.get_entry(key)
        except Exception as e:
            logger.warning("Durable cache read failed for %s: %s", key, e)
            return None
        if entry is None:
            return None

        if not meets_threshold(entry.text, self._min_chars):
            logger.info("Dropping unusable durable cache entry %s", key)
            await self._discard(key)
            return None

        logger.info("Durable cache hit for %s", key)
        self._memory[key] = entry
        return entry

    async def put(
        self,
        fingerprint: Fingerprint,
        text: str,
        source: ExtractionSource = DEFAULT_SOURCE,
    ) -> bool:
        """Cache text under a fingerprint.

        Returns:
            True if the text was cached, False if it was below the threshold.
        """
        if not meets_threshold(text, self._min_chars):
            logger.debug(
                "Not caching %s: %d chars is below threshold",
                fingerprint.key, len(text.strip()),
            )
            return False

        key = fingerprint.key
        self._memory[key] = CacheEntry(text=text, source=source)
        if self._store is not None:
            try:
                await self._store.put(key, text, source)
            except Exception as e:
                logger.warning("Could not persist cache entry %s: %s", key, e)
        logger.info("Cached %d chars for %s (%s)", len(text), key, source)
        return True

    async def _discard(self, key: str) -> None:
        try:
            await self._store.delete(key)  # type: ignore[union-attr]
        except Exception as e:
            logger.warning("Could not remove cache entry %s: %s", key, e)
