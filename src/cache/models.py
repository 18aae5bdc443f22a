# src/cache/models.py — v3
"""Cache domain models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from caselens.core.models import ExtractionSource


class Fingerprint(BaseModel):
    """Metadata-derived cache key for one version of a file.

    Built from the file's base name, size and modification time; never the
    content hash, so computing it costs a single stat() call.
    """

    model_config = ConfigDict(frozen=True)

    base_name: str
    byte_size: int
    modified_at_ms: int

    @property
    def key(self) -> str:
        return f"{self.base_name}_{self.byte_size}_{self.modified_at_ms}"


class CacheEntry(BaseModel):
    """Cached text with the extraction strategy that produced it."""

    model_config = ConfigDict(frozen=True)

    text: str
    source: ExtractionSource = "native"
