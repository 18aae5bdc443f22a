# src/api/facade.py — v3
"""Public API facade: single entry point for case analysis.

Usage:
    from caselens.api.facade import analyze_case
    record = await analyze_case("order.pdf")

Collaborators (cache, probe, LLM client) are built from settings unless
injected; the cache and probe are shared process-wide by default.
"""

from __future__ import annotations

import logging
from pathlib import Path

from caselens.api.models import CaseAnalysisResponse
from caselens.cache.cache_factory import create_extraction_cache
from caselens.cache.extraction_cache import ExtractionCache
from caselens.config.settings import Settings
from caselens.core.models import AnalysisRecord
from caselens.corpus.similar_cases import court_level_tier, find_similar_cases
from caselens.extraction.document_extractor import DocumentTextExtractor
from caselens.extraction.tool_probe import CommandToolProbe
from caselens.llm.base_client import BaseLLMClient
from caselens.llm.client_factory import create_llm_client
from caselens.pipeline.case_analyzer import CaseAnalysisAdapter
from caselens.pipeline.orchestrator import CaseAnalysisOrchestrator
from caselens.pipeline.prompt_loader import load_system_prompt
from caselens.storage.record_store import CaseNotFoundError, RecordStore

logger = logging.getLogger(__name__)

__all__ = [
    "CaseNotFoundError",
    "analyze_and_store",
    "analyze_case",
    "build_orchestrator",
    "list_cases",
    "load_case",
]

_shared_probe: CommandToolProbe | None = None
_shared_caches: dict[str, ExtractionCache | None] = {}


def build_orchestrator(
    settings: Settings | None = None,
    llm_client: BaseLLMClient | None = None,
    cache: ExtractionCache | None = None,
    probe: CommandToolProbe | None = None,
    system_prompt: str | None = None,
) -> CaseAnalysisOrchestrator:
    """Wire an orchestrator from settings and optional collaborators."""
    settings = settings or Settings()
    extractor = DocumentTextExtractor(
        settings=settings,
        cache=cache if cache is not None else _default_cache(settings),
        probe=probe or _default_probe(),
    )
    adapter = CaseAnalysisAdapter(
        llm_client or create_llm_client(settings=settings), settings
    )
    prompt = system_prompt if system_prompt is not None else load_system_prompt(
        settings.prompt_file
    )
    return CaseAnalysisOrchestrator(extractor, adapter, prompt)


async def analyze_case(
    file_path: Path | str,
    settings: Settings | None = None,
    llm_client: BaseLLMClient | None = None,
    cache: ExtractionCache | None = None,
    probe: CommandToolProbe | None = None,
    system_prompt: str | None = None,
) -> AnalysisRecord:
    """Analyze one case document end-to-end.

    Raises:
        FileNotFoundError: If the file does not exist.
        UnsupportedFormatError: If the extension is not supported.
        ExtractionError: If the document yields no text.
    """
    orchestrator = build_orchestrator(settings, llm_client, cache, probe, system_prompt)
    return await orchestrator.analyze_case(file_path)


async def analyze_and_store(
    file_path: Path | str,
    settings: Settings | None = None,
    llm_client: BaseLLMClient | None = None,
    cache: ExtractionCache | None = None,
    probe: CommandToolProbe | None = None,
    system_prompt: str | None = None,
) -> CaseAnalysisResponse:
    """Analyze, persist the record and attach similar cases.

    Persistence failures are logged; the analysis is still returned.
    """
    settings = settings or Settings()
    record = await analyze_case(
        file_path, settings, llm_client, cache, probe, system_prompt
    )

    tier = court_level_tier(record.court_level)
    similar = find_similar_cases(
        tier, settings.similar_cases_limit, settings.case_files_root
    )

    similar_names = [p.name for p in similar]
    record_path: Path | None = None
    try:
        record_path = await RecordStore(settings.records_root).save(record, similar_names)
    except OSError as e:
        logger.error("Failed to save analysis %s: %s", record.case_id, e)

    return CaseAnalysisResponse(
        analysis=record,
        similar_cases=similar_names,
        court_tier=tier,
        record_path=record_path,
    )


async def load_case(case_id: str, settings: Settings | None = None) -> CaseAnalysisResponse:
    """Read a previously stored analysis with its similar cases.

    Raises:
        CaseNotFoundError: If no record exists for case_id.
    """
    settings = settings or Settings()
    stored = await RecordStore(settings.records_root).load(case_id)
    return CaseAnalysisResponse(
        analysis=stored.analysis,
        similar_cases=stored.similar_cases,
        court_tier=court_level_tier(stored.analysis.court_level),
        record_path=stored.path,
    )


async def list_cases(settings: Settings | None = None) -> list[str]:
    """Case IDs of all stored analyses."""
    settings = settings or Settings()
    return await RecordStore(settings.records_root).list_case_ids()


def _default_probe() -> CommandToolProbe:
    global _shared_probe
    if _shared_probe is None:
        _shared_probe = CommandToolProbe()
    return _shared_probe


def _default_cache(settings: Settings) -> ExtractionCache | None:
    key = f"{settings.cache_enabled}:{settings.cache_backend}:{settings.cache_root}"
    if key not in _shared_caches:
        _shared_caches[key] = create_extraction_cache(settings)
    return _shared_caches[key]
