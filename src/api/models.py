# src/api/models.py — v2
"""API-level models returned by the facade."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from caselens.core.models import AnalysisRecord


class CaseAnalysisResponse(BaseModel):
    """Return value of facade.analyze_and_store() and facade.load_case()."""

    model_config = ConfigDict(frozen=True)

    analysis: AnalysisRecord
    similar_cases: list[str] = Field(default_factory=list)
    court_tier: int = 1
    record_path: Path | None = None

    def to_dict(self) -> dict:
        """camelCase analysis plus similar case basenames."""
        return {
            "analysis": self.analysis.to_dict(),
            "similarCases": list(self.similar_cases),
        }
