# src/pipeline/orchestrator.py — v2
"""Case analysis orchestrator: extract, analyze, normalize.

File-system errors and unsupported formats propagate to the caller; a
document that yields no text at all raises ExtractionError. Everything
past extraction degrades into the record instead of raising.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from caselens.core.models import AnalysisRecord
from caselens.extraction.document_extractor import DocumentTextExtractor
from caselens.logging.context import clear_context, set_case_context
from caselens.pipeline.case_analyzer import CaseAnalysisAdapter
from caselens.pipeline.result_normalizer import normalize

logger = logging.getLogger(__name__)


class ExtractionError(RuntimeError):
    """Raised when no text could be extracted from a document."""


class CaseAnalysisOrchestrator:
    """Runs one document through the full analysis flow.

    Args:
        extractor: Cached, format-dispatching text extractor.
        adapter: Model invocation adapter.
        system_prompt: Prompt template sent with every document.
    """

    def __init__(
        self,
        extractor: DocumentTextExtractor,
        adapter: CaseAnalysisAdapter,
        system_prompt: str,
    ) -> None:
        self._extractor = extractor
        self._adapter = adapter
        self._system_prompt = system_prompt

    async def analyze_case(self, file_path: Path | str) -> AnalysisRecord:
        """Analyze one case file and return its normalized record.

        Raises:
            FileNotFoundError: If the file does not exist.
            UnsupportedFormatError: If the extension is not supported.
            ExtractionError: If extraction produced empty text.
        """
        path = Path(file_path)
        set_case_context(path.name)
        start = time.monotonic()
        try:
            logger.info("Processing file: %s", path)
            extraction = await self._extractor.extract(path)
            if not extraction.text or not extraction.text.strip():
                raise ExtractionError("Failed to extract text from document")

            logger.info(
                "Extracted %d characters (source=%s, cached=%s)",
                extraction.character_count, extraction.source, extraction.from_cache,
            )
            raw = await self._adapter.analyze(extraction.text, self._system_prompt)
            record = normalize(raw, path)
        finally:
            clear_context()

        logger.info(
            "Analysis complete: case_id=%s, recommendation=%s, probability=%d, %.1fs",
            record.case_id, record.recommendation, record.success_probability,
            time.monotonic() - start,
        )
        return record
