# src/extraction/txt_extractor.py — v3
"""Plain text extractor: passthrough, no length threshold, no OCR."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from caselens.core.models import ExtractionResult
from caselens.extraction.base_extractor import BaseExtractor

logger = logging.getLogger(__name__)


class TxtExtractor(BaseExtractor):
    """Extractor for plain text files (.txt)."""

    @property
    def supported_extensions(self) -> list[str]:
        return [".txt"]

    @property
    def cacheable(self) -> bool:
        # Reading the file again is as cheap as reading the cache entry.
        return False

    async def extract(self, path: Path) -> ExtractionResult:
        """Return the file content decoded as UTF-8, whatever its length."""
        raw = await asyncio.to_thread(Path(path).read_bytes)
        text = raw.decode("utf-8", errors="replace")
        logger.info("Text file read, length: %d characters", len(text))
        return ExtractionResult(text=text, source="native")
