# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for all deployment-specific settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === LLM PROVIDER ===
    llm_provider: str = "openai"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    llm_temperature: float = 0.2
    llm_max_output_tokens: int = 2000
    llm_context_token_budget: int = 16_000
    llm_chars_per_token: int = 4
    llm_timeout_seconds: float = 120.0

    # === Extraction ===
    min_text_chars: int = 100
    enhanced_line_threshold: float = 1.0
    enhanced_space_gap: float = 2.0

    # === OCR ===
    ocr_cli_max_pages: int = 5
    ocr_library_max_pages: int = 3
    ocr_dpi: int = 300
    ocr_language: str = "eng"
    ocr_timeout_seconds: float = 300.0

    # === Cache ===
    cache_enabled: bool = True
    cache_backend: Literal["file", "sqlite"] = "file"
    cache_root: Path = Path("extraction_cache")

    # === Prompt / storage ===
    prompt_file: Path | None = None
    records_root: Path = Path("analyzed_documents")
    case_files_root: Path = Path("case-files")
    similar_cases_limit: int = 2

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("llm_temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:  # noqa: N805
        if not 0.0 <= v <= 2.0:
            raise ValueError("llm_temperature must be within [0, 2]")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if not self.openai_model.strip():
            errors.append("OPENAI_MODEL must not be empty")

        if self.llm_context_token_budget <= 0 or self.llm_chars_per_token <= 0:
            errors.append(
                "LLM_CONTEXT_TOKEN_BUDGET and LLM_CHARS_PER_TOKEN must be positive"
            )

        if self.min_text_chars <= 0:
            errors.append("MIN_TEXT_CHARS must be positive")

        if self.ocr_cli_max_pages < 1 or self.ocr_library_max_pages < 1:
            errors.append("OCR page limits must be >= 1")

        if self.similar_cases_limit < 0:
            errors.append("SIMILAR_CASES_LIMIT must be >= 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-call config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
