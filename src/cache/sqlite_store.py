# src/cache/sqlite_store.py — v3
"""SQLite-based cache store (CACHE_BACKEND=sqlite).

Uses stdlib sqlite3, no external dependency.
Keeps the cache directory to a single file when many documents are processed.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from caselens.cache.base_cache_store import DEFAULT_SOURCE, BaseCacheStore, coerce_source
from caselens.cache.models import CacheEntry
from caselens.core.models import ExtractionSource

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS extracted_text (
    key TEXT PRIMARY KEY,
    text TEXT NOT NULL,
    source TEXT NOT NULL DEFAULT 'native',
    created_at TEXT DEFAULT CURRENT_TIMESTAMP
);
"""


class SqliteCacheStore(BaseCacheStore):
    """SQLite-backed cache store."""

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)
        self._ensure_source_column()

    def _ensure_source_column(self) -> None:
        """Add the source column to databases created before it existed."""
        columns = {row[1] for row in self._conn.execute("PRAGMA table_info(extracted_text)")}
        if "source" not in columns:
            logger.info("Adding source column to %s", self._db_path)
            self._conn.execute(
                "ALTER TABLE extracted_text ADD COLUMN source TEXT NOT NULL DEFAULT 'native'"
            )
            self._conn.commit()

    async def get_entry(self, key: str) -> CacheEntry | None:
        """Retrieve cached text and source by key."""
        cursor = self._conn.execute(
            "SELECT text, source FROM extracted_text WHERE key = ?", (key,)
        )
        row = cursor.fetchone()
        if row is None:
            return None
        return CacheEntry(text=row[0], source=coerce_source(row[1]))

    async def put(self, key: str, text: str, source: ExtractionSource = DEFAULT_SOURCE) -> None:
        """Store text (upsert)."""
        self._conn.execute(
            "INSERT OR REPLACE INTO extracted_text (key, text, source) VALUES (?, ?, ?)",
            (key, text, source),
        )
        self._conn.commit()

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        self._conn.execute("DELETE FROM extracted_text WHERE key = ?", (key,))
        self._conn.commit()

    async def list_keys(self) -> list[str]:
        """List all cached keys."""
        cursor = self._conn.execute("SELECT key FROM extracted_text ORDER BY key")
        return [row[0] for row in cursor.fetchall()]

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
