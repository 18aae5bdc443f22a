# src/core/models.py — v1
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

ExtractionSource = Literal["native", "enhanced", "library-ocr", "cli-ocr", "error"]
Recommendation = Literal["appeal", "dont-appeal", "review"]

RECOMMENDATIONS: tuple[str, ...] = ("appeal", "dont-appeal", "review")


# === EXTRACTION ===


class StrategyAttempt(BaseModel):
    """Outcome of one extraction strategy run, kept for diagnostics."""

    model_config = ConfigDict(frozen=True)

    name: str
    characters: int = 0
    accepted: bool = False
    skipped: bool = False
    error: str | None = None


class ExtractionResult(BaseModel):
    """Text produced for one document, tagged with the strategy that won."""

    model_config = ConfigDict(frozen=True)

    text: str
    source: ExtractionSource
    attempts: list[StrategyAttempt] = Field(default_factory=list)
    from_cache: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def character_count(self) -> int:
        return len(self.text)

    @property
    def is_error(self) -> bool:
        return self.source == "error"


# === ANALYSIS ===


class AnalysisRecord(BaseModel):
    """Normalized output of one case analysis.

    Every field carries a default so a record is always fully populated,
    even when the model output was unusable. Serialized with camelCase keys.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    case_id: str
    file_name: str = ""
    title: str = "Untitled case"
    case_number: str = "N/A"
    court_level: str = "N/A"
    date_of_order: str = "N/A"
    key_issues: list[str] = Field(default_factory=list)
    statutory_provisions: list[str] = Field(default_factory=list)
    success_probability: int = Field(default=50, ge=0, le=100)
    recommendation: Recommendation = "review"
    reasoning: str = "No detailed reasoning provided."
    precedent_analysis: str = ""
    potential_outcome: str = ""
    raw_analysis: str = ""
    analysis_timestamp: str = ""

    def to_dict(self) -> dict:
        """Return the camelCase JSON-ready representation."""
        return self.model_dump(by_alias=True, mode="json")
