# tests/unit/extraction/test_extractor_factory.py — v2
"""Tests for extraction/extractor_factory.py."""

from __future__ import annotations

import pytest

from caselens.extraction.base_extractor import BaseExtractor
from caselens.extraction.docx_extractor import DocxExtractor
from caselens.extraction.extractor_factory import (
    UnsupportedFormatError,
    build_pdf_extractor,
    create_extractor,
    register_extractor,
    supported_extensions,
)
from caselens.extraction.pdf_extractor import PdfExtractor
from caselens.extraction.tool_probe import CommandToolProbe
from caselens.extraction.txt_extractor import TxtExtractor


class TestCreateExtractor:
    def test_pdf(self, settings):
        assert isinstance(create_extractor(".pdf", settings), PdfExtractor)

    def test_txt(self):
        assert isinstance(create_extractor(".txt"), TxtExtractor)

    def test_docx(self):
        assert isinstance(create_extractor(".docx"), DocxExtractor)

    def test_case_and_dot_insensitive(self):
        assert isinstance(create_extractor("TXT"), TxtExtractor)

    def test_legacy_doc_rejected(self):
        with pytest.raises(UnsupportedFormatError, match=r"\.doc"):
            create_extractor(".doc")

    def test_unknown(self):
        with pytest.raises(UnsupportedFormatError, match="Unsupported file type"):
            create_extractor(".rtf")

    def test_unsupported_is_value_error(self):
        assert issubclass(UnsupportedFormatError, ValueError)


class TestBuildPdfExtractor:
    def test_full_chain(self, settings):
        ext = build_pdf_extractor(settings, CommandToolProbe())
        assert [s.name for s in ext.strategies()] == [
            "enhanced", "standard", "cli-ocr", "library-ocr",
        ]

    def test_shares_probe(self, settings):
        probe = CommandToolProbe()
        ext = build_pdf_extractor(settings, probe)
        cli = ext.strategies()[2]
        assert cli.is_available == probe.is_available


class TestRegistry:
    def test_supported_extensions(self):
        exts = supported_extensions()
        assert ".pdf" in exts
        assert ".txt" in exts
        assert ".doc" not in exts

    def test_register_custom(self):
        class RtfExtractor(TxtExtractor):
            @property
            def supported_extensions(self) -> list[str]:
                return [".rtf"]

        register_extractor(".RTF", RtfExtractor)
        try:
            ext = create_extractor(".rtf")
            assert isinstance(ext, BaseExtractor)
            assert ext.supported_extensions == [".rtf"]
        finally:
            from caselens.extraction import extractor_factory

            extractor_factory._EXTRACTOR_REGISTRY.pop(".rtf", None)
