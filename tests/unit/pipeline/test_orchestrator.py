# tests/unit/pipeline/test_orchestrator.py — v2
"""Tests for pipeline/orchestrator.py — extract, analyze, normalize."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from caselens.core.models import ExtractionResult
from caselens.extraction.extractor_factory import UnsupportedFormatError
from caselens.logging.context import get_context
from caselens.pipeline.orchestrator import CaseAnalysisOrchestrator, ExtractionError

TEXT = "Order sheet of the appellate commissioner. " * 5


def _extractor(result=None, error=None):
    ext = MagicMock()
    ext.extract = AsyncMock(return_value=result, side_effect=error)
    return ext


def _adapter(raw='{"caseTitle": "X v. Y", "recommendation": "appeal"}'):
    adapter = MagicMock()
    adapter.analyze = AsyncMock(return_value=raw)
    return adapter


class TestCaseAnalysisOrchestrator:
    @pytest.mark.asyncio
    async def test_full_flow(self, tmp_path):
        ext = _extractor(ExtractionResult(text=TEXT, source="enhanced"))
        adapter = _adapter()
        orch = CaseAnalysisOrchestrator(ext, adapter, "PROMPT")
        record = await orch.analyze_case(tmp_path / "order.pdf")
        adapter.analyze.assert_awaited_once_with(TEXT, "PROMPT")
        assert record.title == "X v. Y"
        assert record.recommendation == "appeal"
        assert record.file_name == "order.pdf"

    @pytest.mark.asyncio
    async def test_empty_text_raises(self, tmp_path):
        ext = _extractor(ExtractionResult(text="  \n ", source="native"))
        adapter = _adapter()
        orch = CaseAnalysisOrchestrator(ext, adapter, "PROMPT")
        with pytest.raises(ExtractionError, match="Failed to extract text from document"):
            await orch.analyze_case(tmp_path / "empty.txt")
        adapter.analyze.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_diagnostic_text_still_analyzed(self, tmp_path):
        diag = "The provided document is not suitable for analysis due to quality issues."
        ext = _extractor(ExtractionResult(text=diag, source="error"))
        adapter = _adapter(json.dumps({"caseTitle": "Document Analysis Error"}))
        record = await CaseAnalysisOrchestrator(ext, adapter, "P").analyze_case(
            tmp_path / "scan.pdf"
        )
        adapter.analyze.assert_awaited_once()
        assert record.recommendation == "review"
        assert record.success_probability == 50

    @pytest.mark.asyncio
    async def test_file_errors_propagate(self, tmp_path):
        ext = _extractor(error=FileNotFoundError("gone"))
        with pytest.raises(FileNotFoundError):
            await CaseAnalysisOrchestrator(ext, _adapter(), "P").analyze_case(tmp_path / "x.pdf")

    @pytest.mark.asyncio
    async def test_unsupported_format_propagates(self, tmp_path):
        ext = _extractor(error=UnsupportedFormatError("Unsupported file type: .doc"))
        with pytest.raises(UnsupportedFormatError):
            await CaseAnalysisOrchestrator(ext, _adapter(), "P").analyze_case(tmp_path / "x.doc")

    @pytest.mark.asyncio
    async def test_context_cleared(self, tmp_path):
        ext = _extractor(ExtractionResult(text=TEXT, source="native"))
        await CaseAnalysisOrchestrator(ext, _adapter(), "P").analyze_case(tmp_path / "a.pdf")
        assert get_context().case_file is None
