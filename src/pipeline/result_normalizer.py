# src/pipeline/result_normalizer.py — v2
"""Turn raw model output into an AnalysisRecord.

Three tiers, tried in order:
  1. the whole output parsed as a JSON object;
  2. the content of a fenced code block parsed as a JSON object;
  3. regex scraping of probability, recommendation and reasoning.

normalize() never raises; unusable output still yields a populated record.
"""

from __future__ import annotations

import json
import logging
import math
import re
import secrets
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from caselens.core.models import RECOMMENDATIONS, AnalysisRecord

logger = logging.getLogger(__name__)

DEFAULT_PROBABILITY = 50
DEFAULT_RECOMMENDATION = "review"
DEFAULT_REASONING = "No detailed reasoning provided."
REASONING_PREVIEW_CHARS = 500

_FENCE_RE = re.compile(r"```(?:json)?\s*\n(.*?)\n?```", re.DOTALL | re.IGNORECASE)
_PROBABILITY_RE = re.compile(r"success(?:.*?)probability(?:.*?)([0-9]+)", re.IGNORECASE)
_RECOMMENDATION_RE = re.compile(
    r"recommendation(?:.*?)(dont-appeal|appeal|review)", re.IGNORECASE
)
_REASONING_RE = re.compile(r"reasoning\"?[^\"\n]*?\"([^\"]+)\"", re.IGNORECASE)
_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def generate_case_id() -> str:
    """CASE-<epoch-ms>-<6 hex chars>."""
    return f"CASE-{int(time.time() * 1000)}-{secrets.token_hex(3)}"


def normalize(raw_output: str, source_file_path: str | Path) -> AnalysisRecord:
    """Build a record from model output for the given source file."""
    path = Path(source_file_path)
    raw_output = raw_output if isinstance(raw_output, str) else str(raw_output)

    data = _parse_structured(raw_output)
    if data is None:
        data = _extract_fenced(raw_output)
        if data is not None:
            logger.info("Parsed model output from fenced code block")

    base = {
        "case_id": generate_case_id(),
        "file_name": path.name,
        "raw_analysis": raw_output,
        "analysis_timestamp": datetime.now(timezone.utc).isoformat(),
    }

    if data is not None:
        fields = _coerce_fields(data, path)
    else:
        logger.warning("Model output is not valid JSON, falling back to text scraping")
        fields = {"title": path.stem, **_regex_fallback(raw_output)}

    return AnalysisRecord(**base, **fields)


def _parse_structured(raw_output: str) -> dict[str, Any] | None:
    """Parse the whole output as a JSON object."""
    try:
        parsed = json.loads(raw_output)
    except (ValueError, TypeError):
        return None
    return parsed if isinstance(parsed, dict) else None


def _extract_fenced(raw_output: str) -> dict[str, Any] | None:
    """Parse the first fenced code block holding a JSON object."""
    for match in _FENCE_RE.finditer(raw_output):
        parsed = _parse_structured(match.group(1).strip())
        if parsed is not None:
            return parsed
    return None


def _regex_fallback(raw_output: str) -> dict[str, Any]:
    """Scrape the key fields from free-form text."""
    fields: dict[str, Any] = {
        "success_probability": DEFAULT_PROBABILITY,
        "recommendation": DEFAULT_RECOMMENDATION,
    }

    prob = _PROBABILITY_RE.search(raw_output)
    if prob:
        fields["success_probability"] = _parse_number(prob.group(1))

    rec = _RECOMMENDATION_RE.search(raw_output)
    if rec:
        fields["recommendation"] = rec.group(1).lower()

    reasoning = _REASONING_RE.search(raw_output)
    if reasoning:
        fields["reasoning"] = reasoning.group(1)
    else:
        preview = raw_output[:REASONING_PREVIEW_CHARS]
        if len(raw_output) > REASONING_PREVIEW_CHARS:
            preview += "..."
        fields["reasoning"] = preview or DEFAULT_REASONING
    return fields


def _coerce_fields(data: dict[str, Any], path: Path) -> dict[str, Any]:
    return {
        "title": _text(data.get("caseTitle")) or _text(data.get("title")) or path.stem,
        "case_number": _text(data.get("caseNumber")) or "N/A",
        "court_level": _text(data.get("courtLevel")) or "N/A",
        "date_of_order": _text(data.get("dateOfOrder")) or "N/A",
        "key_issues": _string_list(data.get("keyIssues")),
        "statutory_provisions": _string_list(data.get("statutoryProvisions")),
        "success_probability": _probability(data.get("successProbability")),
        "recommendation": _recommendation(data.get("recommendation")),
        "reasoning": _text(data.get("reasoning")) or DEFAULT_REASONING,
        "precedent_analysis": _text(data.get("precedentAnalysis")),
        "potential_outcome": _text(data.get("potentialOutcome")),
    }


# --- Coercion helpers ---


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def _string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [_text(item) for item in value if item is not None and _text(item)]
    return [_text(value)]


def _clamp(value: int) -> int:
    return max(0, min(100, value))


def _probability(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        return DEFAULT_PROBABILITY
    if isinstance(value, int):
        return _clamp(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return DEFAULT_PROBABILITY
        return _clamp(round(value))
    if isinstance(value, str):
        match = _NUMBER_RE.search(value)
        if match:
            return _parse_number(match.group(0))
    return DEFAULT_PROBABILITY


def _parse_number(digits: str) -> int:
    """Clamped probability from a numeric string; oversized numbers give the default."""
    try:
        return _clamp(round(float(digits)))
    except (ValueError, OverflowError):
        return DEFAULT_PROBABILITY


def _recommendation(value: Any) -> str:
    if not isinstance(value, str):
        return DEFAULT_RECOMMENDATION
    key = value.strip().lower().replace("'", "").replace("_", "-").replace(" ", "-")
    key = re.sub(r"-+", "-", key)
    if key in ("do-not-appeal", "donot-appeal", "no-appeal"):
        key = "dont-appeal"
    return key if key in RECOMMENDATIONS else DEFAULT_RECOMMENDATION
