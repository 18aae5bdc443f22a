# src/extraction/ocr/base_ocr_runner.py — v1
"""Abstract OCR runner interface.

Two implementations exist: the command-line runner (pdftoppm + tesseract
binaries) and the library runner (pdf2image + pytesseract). Tests substitute
a fake runner so no binary is ever invoked.
"""

from __future__ import annotations

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n\n"


class OcrError(RuntimeError):
    """Raised when an OCR run cannot produce any text at all."""


class BaseOcrRunner(ABC):
    """Rasterize a PDF and read its pages with an OCR engine."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Runner identifier (e.g. 'cli-ocr')."""

    @abstractmethod
    async def run(self, pdf_path: Path) -> str:
        """Return the OCR text of the first pages, joined by blank lines."""


def remove_temp_dir(path: Path) -> None:
    """Delete a per-invocation temp directory, logging instead of raising."""
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not clean up temporary files in %s: %s", path, e)
