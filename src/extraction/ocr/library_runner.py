# src/extraction/ocr/library_runner.py — v1
"""Library OCR: pdf2image rasterizes, pytesseract reads each page.

Requires the 'pdf2image', 'pytesseract' and 'Pillow' packages (plus the
poppler and tesseract system packages they drive).
"""

from __future__ import annotations

import asyncio
import logging
import tempfile
from pathlib import Path

from caselens.extraction.ocr.base_ocr_runner import (
    PAGE_SEPARATOR,
    BaseOcrRunner,
    remove_temp_dir,
)

logger = logging.getLogger(__name__)


class LibraryOcrRunner(BaseOcrRunner):
    """OCR through pdf2image + pytesseract, page by page."""

    def __init__(self, max_pages: int = 3, dpi: int = 300, language: str = "eng") -> None:
        self._max_pages = max_pages
        self._dpi = dpi
        self._language = language

    @property
    def name(self) -> str:
        return "library-ocr"

    async def run(self, pdf_path: Path) -> str:
        try:
            import pdf2image
            import pytesseract
            from PIL import Image
        except ImportError as e:
            raise ImportError(
                "pdf2image, pytesseract and Pillow are required for library OCR: "
                "pip install pdf2image pytesseract Pillow"
            ) from e

        temp_dir = Path(tempfile.mkdtemp(prefix="caselens_ocr_"))
        try:
            image_paths = await asyncio.to_thread(
                pdf2image.convert_from_path,
                str(pdf_path),
                dpi=self._dpi,
                first_page=1,
                last_page=self._max_pages,
                output_folder=str(temp_dir),
                fmt="png",
                paths_only=True,
            )
            if not image_paths:
                logger.warning("Could not convert any pages from PDF to images")
                return ""
            logger.info("Converted %d pages to images", len(image_paths))

            page_texts: list[str] = []
            for image_path in sorted(image_paths):
                try:
                    text = await asyncio.to_thread(
                        self._read_page, image_path, pytesseract, Image
                    )
                except Exception as e:
                    logger.warning("OCR failed for page %s: %s", image_path, e)
                    continue
                if text.strip():
                    page_texts.append(text)

            combined = PAGE_SEPARATOR.join(page_texts)
            logger.info(
                "Library OCR complete: %d characters from %d pages",
                len(combined), len(page_texts),
            )
            return combined
        finally:
            remove_temp_dir(temp_dir)

    def _read_page(self, image_path: str, pytesseract_module: object, image_module: object) -> str:
        with image_module.open(image_path) as img:  # type: ignore[attr-defined]
            return pytesseract_module.image_to_string(img, lang=self._language)  # type: ignore[attr-defined]
