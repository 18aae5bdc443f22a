# src/cache/fingerprint.py — v3
"""File fingerprinting for the extraction cache.

A fingerprint changes whenever the file is replaced, resized or touched, so a
new version of a document always yields a new key instead of overwriting the
cached text of the previous one.
"""

from __future__ import annotations

from pathlib import Path

from caselens.cache.models import Fingerprint


def compute_fingerprint(path: Path | str) -> Fingerprint:
    """Build the fingerprint of a file from its stat() metadata.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    p = Path(path)
    stat = p.stat()
    return Fingerprint(
        base_name=p.name,
        byte_size=stat.st_size,
        modified_at_ms=stat.st_mtime_ns // 1_000_000,
    )


def safe_key(key: str) -> str:
    """Make a fingerprint key usable as a file name."""
    return key.replace("/", "_").replace("\\", "_")
