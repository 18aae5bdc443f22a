# src/cache/cache_factory.py — v3
"""Factory for cache store and extraction cache instantiation."""

from __future__ import annotations

from caselens.cache.base_cache_store import BaseCacheStore
from caselens.cache.extraction_cache import ExtractionCache
from caselens.config.settings import Settings


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore:
    """Instantiate the configured durable cache backend.

    Args:
        settings: Application settings. Defaults to the file backend.

    Returns:
        Configured BaseCacheStore implementation.
    """
    backend = "file" if settings is None else settings.cache_backend
    cache_root = "extraction_cache" if settings is None else str(settings.cache_root)

    if backend == "file":
        from caselens.cache.file_store import FileCacheStore
        return FileCacheStore(cache_root=cache_root)

    if backend == "sqlite":
        from caselens.cache.sqlite_store import SqliteCacheStore
        return SqliteCacheStore(db_path=f"{cache_root}/extraction_cache.db")

    raise ValueError(f"Unsupported cache backend: {backend!r}")


def create_extraction_cache(settings: Settings) -> ExtractionCache | None:
    """Build the process-wide extraction cache, or None when disabled."""
    if not settings.cache_enabled:
        return None
    return ExtractionCache(
        store=create_cache_store(settings),
        min_chars=settings.min_text_chars,
    )
