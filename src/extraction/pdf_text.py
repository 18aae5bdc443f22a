# src/extraction/pdf_text.py — v1
"""PDF text-layer parsing using PyMuPDF (fitz).

Two flavours:
  - native: the text layer as PyMuPDF renders it, page by page.
  - enhanced: text spans re-ordered from their glyph coordinates to recover
    reading order and line breaks in PDFs whose content stream is scrambled.

Requires the 'pymupdf' package.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from pathlib import Path


@dataclass(frozen=True)
class TextFragment:
    """One positioned run of text, in PDF user space (origin bottom-left)."""

    text: str
    x: float
    y: float
    width: float = 0.0


def reconstruct_lines(
    fragments: list[TextFragment],
    line_threshold: float = 1.0,
    space_gap: float = 2.0,
) -> str:
    """Rebuild page text from positioned fragments.

    Fragments are sorted top-to-bottom (descending y) and, within a line
    (|dy| < line_threshold), left-to-right. A newline is emitted when the
    vertical delta exceeds line_threshold, a space when the horizontal gap
    from the end of the previous fragment exceeds space_gap.
    """

    def _compare(a: TextFragment, b: TextFragment) -> int:
        if abs(a.y - b.y) < line_threshold:
            return (a.x > b.x) - (a.x < b.x)
        return (b.y > a.y) - (b.y < a.y)

    ordered = sorted(fragments, key=cmp_to_key(_compare))

    parts: list[str] = []
    last_y: float | None = None
    last_end_x: float | None = None
    for frag in ordered:
        if last_y is not None and abs(frag.y - last_y) > line_threshold:
            parts.append("\n")
            last_end_x = None
        if last_end_x is not None and frag.x - last_end_x > space_gap:
            parts.append(" ")
        parts.append(frag.text)
        last_y = frag.y
        last_end_x = frag.x + frag.width
    return "".join(parts)


def page_fragments(page: object) -> list[TextFragment]:
    """Collect text spans of a PyMuPDF page as PDF-space fragments."""
    height = page.rect.height  # type: ignore[attr-defined]
    fragments: list[TextFragment] = []
    layout = page.get_text("dict")  # type: ignore[attr-defined]
    for block in layout.get("blocks", []):
        if block.get("type", 0) != 0:
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                text = span.get("text", "")
                if not text:
                    continue
                x0, _, x1, _ = span["bbox"]
                _, baseline = span.get("origin", (x0, span["bbox"][3]))
                fragments.append(
                    TextFragment(text=text, x=x0, y=height - baseline, width=x1 - x0)
                )
    return fragments


def _open_pdf(path: Path) -> object:
    try:
        import fitz  # PyMuPDF
    except ImportError as e:
        raise ImportError(
            "pymupdf package required for PDF extraction: pip install pymupdf"
        ) from e
    return fitz.open(str(path))


def extract_native_text(path: Path) -> str:
    """Plain text-layer extraction, one page after another."""
    doc = _open_pdf(path)
    try:
        return "\n".join(page.get_text("text") for page in doc)  # type: ignore[attr-defined]
    finally:
        doc.close()  # type: ignore[attr-defined]


def extract_enhanced_text(
    path: Path,
    line_threshold: float = 1.0,
    space_gap: float = 2.0,
) -> str:
    """Coordinate-aware extraction; pages are separated by a blank line."""
    doc = _open_pdf(path)
    try:
        pages = [
            reconstruct_lines(page_fragments(page), line_threshold, space_gap)
            for page in doc  # type: ignore[attr-defined]
        ]
    finally:
        doc.close()  # type: ignore[attr-defined]
    return "\n\n".join(pages)
