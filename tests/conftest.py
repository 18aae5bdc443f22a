# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides mock LLM clients, settings isolated from .env, temp directories
and PyMuPDF-generated sample PDFs. No network or OCR binary is used.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from caselens.config.settings import Settings
from caselens.llm.models import LLMResponse

SAMPLE_SENTENCE = (
    "The appellant challenges the assessment order passed under section 143(3) "
    "of the Income Tax Act on the ground that the addition was made without notice."
)


# === HELPERS ===


def make_text_pdf(path: Path, lines: list[str], lines_per_page: int = 50) -> Path:
    """Write a text-layer PDF with one inserted line per entry."""
    import fitz

    doc = fitz.open()
    for start in range(0, max(len(lines), 1), lines_per_page):
        page = doc.new_page()
        y = 60.0
        for line in lines[start:start + lines_per_page]:
            page.insert_text((50, y), line, fontsize=9)
            y += 14.0
    doc.save(str(path))
    doc.close()
    return path


def long_lines(total_chars: int) -> list[str]:
    """Lines of legal-looking prose adding up to at least total_chars."""
    lines: list[str] = []
    count = 0
    i = 0
    while count < total_chars:
        line = f"{i:04d} {SAMPLE_SENTENCE[:80]}"
        lines.append(line)
        count += len(line)
        i += 1
    return lines


# === FIXTURES: Settings ===


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings with every writable location under tmp_path."""
    return Settings(
        _env_file=None,
        openai_api_key="test-key",
        cache_root=tmp_path / "cache",
        records_root=tmp_path / "records",
        case_files_root=tmp_path / "case-files",
    )


# === FIXTURES: Sample files ===


@pytest.fixture
def text_pdf(tmp_path: Path) -> Path:
    """Clean native-text PDF of roughly 5,000 characters."""
    return make_text_pdf(tmp_path / "order.pdf", long_lines(5000))


@pytest.fixture
def sparse_pdf(tmp_path: Path) -> Path:
    """PDF whose text layer holds about 50 characters (scanned-like)."""
    return make_text_pdf(tmp_path / "scanned.pdf", ["Scanned copy of order dated 12.03.2021 page 1"])


@pytest.fixture
def case_txt(tmp_path: Path) -> Path:
    p = tmp_path / "appeal.txt"
    p.write_text((SAMPLE_SENTENCE + "\n") * 5, encoding="utf-8")
    return p


# === FIXTURES: Mock LLM ===


@pytest.fixture
def mock_llm_response() -> LLMResponse:
    """Standard mock LLM response."""
    return LLMResponse(
        content=(
            '{"caseTitle": "Acme Traders v. ACIT", "caseNumber": "ITA 101/2020", '
            '"courtLevel": "High Court", "dateOfOrder": "2021-03-12", '
            '"keyIssues": ["Addition under section 68"], '
            '"statutoryProvisions": ["Section 143(3)"], '
            '"successProbability": 70, "recommendation": "appeal", '
            '"reasoning": "Addition made without notice.", '
            '"precedentAnalysis": "Follows settled law.", '
            '"potentialOutcome": "Addition likely deleted."}'
        ),
        input_tokens=1000,
        output_tokens=120,
        model="gpt-4o",
        provider="openai",
        latency_ms=500,
    )


@pytest.fixture
def mock_llm_client(mock_llm_response: LLMResponse) -> AsyncMock:
    """Mock BaseLLMClient with default response."""
    client = AsyncMock()
    client.complete = AsyncMock(return_value=mock_llm_response)
    client.provider_name = "mock"
    client.model = "mock-model"
    return client


# === FIXTURES: Temp dirs ===


@pytest.fixture
def tmp_cache_dir(tmp_path: Path) -> Path:
    """Temporary cache directory."""
    cache = tmp_path / "cache"
    cache.mkdir()
    return cache


@pytest.fixture
def pdf_factory(tmp_path: Path):
    """Build text-layer PDFs under tmp_path: pdf_factory(name, lines)."""

    def _make(name: str, lines: list[str]) -> Path:
        return make_text_pdf(tmp_path / name, lines)

    return _make


@pytest.fixture
def prose_lines():
    """prose_lines(n) returns lines totalling at least n characters."""
    return long_lines
