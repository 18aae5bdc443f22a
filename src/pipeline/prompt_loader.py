# src/pipeline/prompt_loader.py — v1
"""Load the system prompt template for case analysis."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_PROMPT_PATH = Path(__file__).parent / "prompts" / "case_analysis.md"


def load_system_prompt(path: Path | str | None = None) -> str:
    """Read a prompt template, falling back to the packaged default.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
    """
    prompt_path = Path(path) if path else DEFAULT_PROMPT_PATH
    if not prompt_path.is_file():
        raise FileNotFoundError(f"Prompt file not found: {prompt_path}")
    text = prompt_path.read_text(encoding="utf-8").strip()
    logger.debug("Loaded system prompt from %s (%d chars)", prompt_path, len(text))
    return text
