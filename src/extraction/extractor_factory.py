# src/extraction/extractor_factory.py — v3
"""Factory: instantiate extractor from file extension."""

from __future__ import annotations

from typing import TYPE_CHECKING

from caselens.extraction.base_extractor import BaseExtractor
from caselens.extraction.docx_extractor import DocxExtractor
from caselens.extraction.pdf_extractor import PdfExtractor
from caselens.extraction.txt_extractor import TxtExtractor

if TYPE_CHECKING:
    from caselens.config.settings import Settings
    from caselens.extraction.tool_probe import CommandToolProbe

# Registry maps extension → extractor class.
_EXTRACTOR_REGISTRY: dict[str, type[BaseExtractor]] = {
    ".txt": TxtExtractor,
    ".pdf": PdfExtractor,
    ".docx": DocxExtractor,
}

# Accepted at upload by some front-ends but with no extraction path.
_REJECTED_FORMATS: dict[str, str] = {
    ".doc": "legacy binary Word files cannot be read; save the document as .docx or PDF",
}


class UnsupportedFormatError(ValueError):
    """Raised when no extractor is available for a format."""


def create_extractor(
    extension: str,
    settings: Settings | None = None,
    probe: CommandToolProbe | None = None,
) -> BaseExtractor:
    """Create an extractor for the given file extension.

    Args:
        extension: File extension including dot (e.g. ".pdf", ".txt").
        settings: Application settings, used to configure the PDF chain.
        probe: Shared OCR tool probe for the PDF chain.

    Returns:
        BaseExtractor instance.

    Raises:
        UnsupportedFormatError: If no extractor is registered.
    """
    ext = extension.lower()
    if not ext.startswith("."):
        ext = f".{ext}"

    if ext in _REJECTED_FORMATS:
        raise UnsupportedFormatError(
            f"Unsupported file type: {ext} ({_REJECTED_FORMATS[ext]})"
        )

    cls = _EXTRACTOR_REGISTRY.get(ext)
    if cls is None:
        raise UnsupportedFormatError(
            f"Unsupported file type: {ext!r}. "
            f"Supported: {', '.join(sorted(_EXTRACTOR_REGISTRY))}"
        )
    if cls is PdfExtractor:
        return build_pdf_extractor(settings, probe)
    return cls()


def build_pdf_extractor(
    settings: Settings | None = None,
    probe: CommandToolProbe | None = None,
) -> PdfExtractor:
    """Wire the PDF chain with both OCR runners from settings."""
    from caselens.config.settings import Settings
    from caselens.extraction.ocr.cli_runner import CommandLineOcrRunner
    from caselens.extraction.ocr.library_runner import LibraryOcrRunner
    from caselens.extraction.tool_probe import CommandToolProbe

    settings = settings or Settings()
    probe = probe or CommandToolProbe()
    return PdfExtractor(
        probe=probe,
        cli_runner=CommandLineOcrRunner(
            probe,
            max_pages=settings.ocr_cli_max_pages,
            dpi=settings.ocr_dpi,
            language=settings.ocr_language,
            timeout_s=settings.ocr_timeout_seconds,
        ),
        library_runner=LibraryOcrRunner(
            max_pages=settings.ocr_library_max_pages,
            dpi=settings.ocr_dpi,
            language=settings.ocr_language,
        ),
        min_chars=settings.min_text_chars,
        line_threshold=settings.enhanced_line_threshold,
        space_gap=settings.enhanced_space_gap,
    )


def register_extractor(extension: str, cls: type[BaseExtractor]) -> None:
    """Register a custom extractor for an extension."""
    _EXTRACTOR_REGISTRY[extension.lower()] = cls


def supported_extensions() -> list[str]:
    """Return list of supported file extensions."""
    return sorted(_EXTRACTOR_REGISTRY.keys())
