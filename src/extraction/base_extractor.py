# src/extraction/base_extractor.py — v2
"""Abstract extractor interface for document formats."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from caselens.core.models import ExtractionResult


class BaseExtractor(ABC):
    """Unified interface for document format extractors."""

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """File extensions this extractor handles (e.g., ['.pdf'])."""

    @abstractmethod
    async def extract(self, path: Path) -> ExtractionResult:
        """Extract text from the document at path.

        Implementations never raise for degraded content; they raise only for
        file-system level problems (missing or unreadable file).
        """

    @property
    def cacheable(self) -> bool:
        """Whether successful results should be written to the extraction cache."""
        return True
