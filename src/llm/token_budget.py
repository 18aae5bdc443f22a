# src/llm/token_budget.py — v3
"""Token estimation and head/tail truncation of long documents.

Case facts cluster at the start of a judgment and the operative order at
its end, so an over-long document keeps both ends and drops the middle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "\n\n[...content truncated for length...]\n\n"

# Share of the character budget kept from each end.
HEAD_SHARE = 0.625
TAIL_SHARE = 0.375


@dataclass(frozen=True)
class TruncatedText:
    """Document text after applying the budget."""

    text: str
    original_length: int
    truncated: bool


def estimate_tokens(text: str, chars_per_token: int = 4) -> int:
    """Rough token estimate from character count."""
    return len(text) // max(chars_per_token, 1)


def char_budget(token_budget: int, chars_per_token: int = 4) -> int:
    """Characters allowed for a token budget."""
    return token_budget * chars_per_token


def truncate_for_budget(
    text: str,
    token_budget: int = 16_000,
    chars_per_token: int = 4,
) -> TruncatedText:
    """Keep the head and tail of a document that exceeds the budget.

    The kept head and tail are 62.5% and 37.5% of the character budget, so
    the result never exceeds the budget plus the marker.
    """
    budget = char_budget(token_budget, chars_per_token)
    if len(text) <= budget:
        return TruncatedText(text=text, original_length=len(text), truncated=False)

    head = int(budget * HEAD_SHARE)
    tail = int(budget * TAIL_SHARE)
    logger.info(
        "Document exceeds token limit. Truncating from %d characters (~%d tokens)",
        len(text), estimate_tokens(text, chars_per_token),
    )
    truncated = text[:head] + TRUNCATION_MARKER + text[len(text) - tail:]
    logger.info("Truncated to %d characters", len(truncated))
    return TruncatedText(text=truncated, original_length=len(text), truncated=True)
