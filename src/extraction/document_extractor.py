# src/extraction/document_extractor.py — v2
"""Cache-aware entry point: file path in, ExtractionResult out."""

from __future__ import annotations

import logging
from pathlib import Path

from caselens.cache.extraction_cache import ExtractionCache
from caselens.cache.fingerprint import compute_fingerprint
from caselens.config.settings import Settings
from caselens.core.models import ExtractionResult
from caselens.extraction.base_extractor import BaseExtractor
from caselens.extraction.extractor_factory import create_extractor
from caselens.extraction.tool_probe import CommandToolProbe
from caselens.logging.context import set_case_context

logger = logging.getLogger(__name__)


class DocumentTextExtractor:
    """Resolve the extractor for a file and memoize its output by fingerprint.

    Cache hits report ``from_cache=True`` and the source of the extraction
    that filled the entry.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        cache: ExtractionCache | None = None,
        probe: CommandToolProbe | None = None,
        extractors: dict[str, BaseExtractor] | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._cache = cache
        self._probe = probe or CommandToolProbe()
        self._extractors: dict[str, BaseExtractor] = dict(extractors or {})

    @property
    def cache(self) -> ExtractionCache | None:
        return self._cache

    def extractor_for(self, path: Path) -> BaseExtractor:
        """Return (and reuse) the extractor for a path's extension.

        Raises:
            UnsupportedFormatError: If the extension has no extractor.
        """
        ext = path.suffix.lower()
        if ext not in self._extractors:
            self._extractors[ext] = create_extractor(ext, self._settings, self._probe)
        return self._extractors[ext]

    async def extract(self, file_path: Path | str) -> ExtractionResult:
        """Extract text from a document, consulting the cache first.

        Raises:
            FileNotFoundError: If the file does not exist.
            UnsupportedFormatError: If the extension is not supported.
        """
        path = Path(file_path)
        set_case_context(path.name)
        logger.info("Extracting text from file: %s", path)

        if not path.is_file():
            raise FileNotFoundError(f"Document not found: {path}")
        extractor = self.extractor_for(path)

        use_cache = self._cache is not None and extractor.cacheable
        fingerprint = compute_fingerprint(path) if use_cache else None

        if use_cache:
            cached = await self._cache.get_entry(fingerprint)  # type: ignore[union-attr, arg-type]
            if cached is not None:
                logger.info("Using cached extraction result for %s", path.name)
                return ExtractionResult(text=cached.text, source=cached.source, from_cache=True)

        result = await extractor.extract(path)

        if use_cache and not result.is_error:
            await self._cache.put(fingerprint, result.text, result.source)  # type: ignore[union-attr, arg-type]

        logger.info(
            "Extraction finished: source=%s, %d characters",
            result.source, result.character_count,
        )
        return result
