# src/extraction/docx_extractor.py — v2
"""DOCX extractor using python-docx.

Extracts paragraph text and tables from Word documents. Legacy binary .doc
files are not handled here; the factory rejects them explicitly.
Requires the 'python-docx' package.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from caselens.core.models import ExtractionResult, StrategyAttempt
from caselens.extraction.base_extractor import BaseExtractor

logger = logging.getLogger(__name__)


class DocxExtractor(BaseExtractor):
    """Extractor for Word documents (.docx)."""

    @property
    def supported_extensions(self) -> list[str]:
        return [".docx"]

    async def extract(self, path: Path) -> ExtractionResult:
        """Extract paragraphs and tables; return a diagnostic on parse failure."""
        try:
            import docx
        except ImportError as e:
            raise ImportError(
                "python-docx package required for DOCX extraction: "
                "pip install python-docx"
            ) from e

        if not Path(path).is_file():
            raise FileNotFoundError(f"DOCX file not found: {path}")

        try:
            text = await asyncio.to_thread(self._read_document, path, docx)
        except Exception as e:
            logger.warning("DOCX parsing failed for %s: %s", path, e)
            return ExtractionResult(
                text=(
                    f"Error extracting text from document: {e}. The Word file may "
                    "be corrupted or password protected and is not suitable for "
                    "analysis. Please provide a text-based PDF or plain text copy."
                ),
                source="error",
                attempts=[StrategyAttempt(name="docx", error=str(e))],
            )

        logger.info("DOCX extraction complete: %d characters", len(text))
        return ExtractionResult(
            text=text,
            source="native",
            attempts=[StrategyAttempt(name="docx", characters=len(text), accepted=True)],
        )

    @classmethod
    def _read_document(cls, path: Path, docx_module: object) -> str:
        doc = docx_module.Document(str(path))  # type: ignore[attr-defined]
        parts = [para.text for para in doc.paragraphs if para.text.strip()]
        for table in doc.tables:
            rows = [[cell.text.strip() for cell in row.cells] for row in table.rows]
            md = cls._rows_to_markdown(rows)
            if md:
                parts.append(md)
        return "\n\n".join(parts)

    @staticmethod
    def _rows_to_markdown(rows: list[list[str]]) -> str:
        """Convert table rows to Markdown format."""
        if not rows:
            return ""
        max_cols = max(len(r) for r in rows)
        normalized = [r + [""] * (max_cols - len(r)) for r in rows]

        lines: list[str] = []
        header = normalized[0]
        lines.append("| " + " | ".join(header) + " |")
        lines.append("| " + " | ".join("---" for _ in header) + " |")
        for row in normalized[1:]:
            lines.append("| " + " | ".join(row) + " |")
        return "\n".join(lines)
