# src/cache/base_cache_store.py — v3
"""Abstract durable store for extracted text."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import get_args

from caselens.cache.models import CacheEntry
from caselens.core.models import ExtractionSource

DEFAULT_SOURCE: ExtractionSource = "native"
_KNOWN_SOURCES = frozenset(get_args(ExtractionSource))


def coerce_source(value: str | None) -> ExtractionSource:
    """Stored source label, or the default when missing or unknown."""
    if value in _KNOWN_SOURCES:
        return value  # type: ignore[return-value]
    return DEFAULT_SOURCE


class BaseCacheStore(ABC):
    """Unified interface for durable cache backends."""

    async def get(self, key: str) -> str | None:
        """Retrieve cached text by fingerprint key."""
        entry = await self.get_entry(key)
        return entry.text if entry is not None else None

    @abstractmethod
    async def get_entry(self, key: str) -> CacheEntry | None:
        """Retrieve cached text and its source by fingerprint key."""

    @abstractmethod
    async def put(self, key: str, text: str, source: ExtractionSource = DEFAULT_SOURCE) -> None:
        """Store text and its source under a fingerprint key."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a cache entry."""

    @abstractmethod
    async def list_keys(self) -> list[str]:
        """List all stored keys."""
