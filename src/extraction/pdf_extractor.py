# src/extraction/pdf_extractor.py — v2
"""PDF extractor: ordered fallback from text layer to OCR.

Order: enhanced (coordinate-aware) text layer, standard text layer,
command-line OCR (when the binaries are present), library OCR. When no
strategy clears the threshold, a diagnostic message is returned as the
document text instead of raising.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from caselens.cache.extraction_cache import DEFAULT_MIN_CHARS
from caselens.core.models import ExtractionResult
from caselens.extraction.base_extractor import BaseExtractor
from caselens.extraction.ocr.base_ocr_runner import BaseOcrRunner
from caselens.extraction.pdf_text import extract_enhanced_text, extract_native_text
from caselens.extraction.strategy import ChainOutcome, ExtractionStrategy, run_chain
from caselens.extraction.tool_probe import CommandToolProbe

logger = logging.getLogger(__name__)

UNSUITABLE_DOCUMENT_MESSAGE = (
    "The provided document is not suitable for analysis due to quality issues. "
    "Please provide a text-based PDF or transcribe the key elements of the case.\n\n"
    "Possible solutions:\n"
    "1. If you have access to the original document, export it as a text-based PDF\n"
    "2. Use a document conversion tool to convert the scanned PDF to text\n"
    "3. For important cases, consider manual transcription of key sections\n\n"
    "Technical details: Document appears to be an image-based PDF. Multiple "
    "extraction methods were attempted ({methods}) but yielded insufficient "
    "text ({characters} characters)."
)


class PdfExtractor(BaseExtractor):
    """Extractor for PDF files with OCR fallback."""

    def __init__(
        self,
        probe: CommandToolProbe | None = None,
        cli_runner: BaseOcrRunner | None = None,
        library_runner: BaseOcrRunner | None = None,
        min_chars: int = DEFAULT_MIN_CHARS,
        line_threshold: float = 1.0,
        space_gap: float = 2.0,
    ) -> None:
        self._probe = probe or CommandToolProbe()
        self._cli_runner = cli_runner
        self._library_runner = library_runner
        self._min_chars = min_chars
        self._line_threshold = line_threshold
        self._space_gap = space_gap

    @property
    def supported_extensions(self) -> list[str]:
        return [".pdf"]

    def strategies(self) -> list[ExtractionStrategy]:
        """The ordered fallback chain for this extractor."""
        chain = [
            ExtractionStrategy("enhanced", "enhanced", self._run_enhanced, self._min_chars),
            ExtractionStrategy("standard", "native", self._run_native, self._min_chars),
        ]
        if self._cli_runner is not None:
            chain.append(
                ExtractionStrategy(
                    "cli-ocr", "cli-ocr", self._cli_runner.run, self._min_chars,
                    is_available=self._probe.is_available,
                )
            )
        if self._library_runner is not None:
            chain.append(
                ExtractionStrategy(
                    "library-ocr", "library-ocr", self._library_runner.run, self._min_chars,
                )
            )
        return chain

    async def extract(self, path: Path) -> ExtractionResult:
        """Run the fallback chain; never raises for unreadable content."""
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"PDF file not found: {path}")
        logger.info("PDF file read, size: %d bytes", path.stat().st_size)

        outcome = await run_chain(self.strategies(), path)
        if outcome.accepted:
            return ExtractionResult(
                text=outcome.text or "",
                source=outcome.source,  # type: ignore[arg-type]
                attempts=outcome.attempts,
            )

        logger.warning("All extraction methods yielded minimal text for %s", path.name)
        return ExtractionResult(
            text=self.diagnostic_message(outcome),
            source="error",
            attempts=outcome.attempts,
        )

    @staticmethod
    def diagnostic_message(outcome: ChainOutcome) -> str:
        methods = ", ".join(a.name for a in outcome.attempts if not a.skipped) or "none"
        return UNSUITABLE_DOCUMENT_MESSAGE.format(
            methods=methods, characters=outcome.best_characters
        )

    async def _run_enhanced(self, path: Path) -> str:
        return await asyncio.to_thread(
            extract_enhanced_text, path, self._line_threshold, self._space_gap
        )

    async def _run_native(self, path: Path) -> str:
        return await asyncio.to_thread(extract_native_text, path)
