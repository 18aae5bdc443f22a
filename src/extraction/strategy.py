# src/extraction/strategy.py — v1
"""Ordered extraction strategies and the loop that runs them.

Each strategy is a uniform (name, source, run, min_chars) entry; the chain
stops at the first one whose output clears its threshold. A strategy that
raises is logged and recorded, never fatal to the chain.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable

from caselens.cache.extraction_cache import DEFAULT_MIN_CHARS, meets_threshold
from caselens.core.models import ExtractionSource, StrategyAttempt
from caselens.logging.context import set_strategy_context

logger = logging.getLogger(__name__)

StrategyRunner = Callable[[Path], Awaitable[str]]


@dataclass(frozen=True)
class ExtractionStrategy:
    """One extraction method in the fallback chain."""

    name: str
    source: ExtractionSource
    run: StrategyRunner
    min_chars: int = DEFAULT_MIN_CHARS
    is_available: Callable[[], bool] | None = None


@dataclass
class ChainOutcome:
    """Result of running a strategy chain over one document."""

    text: str | None = None
    source: ExtractionSource | None = None
    attempts: list[StrategyAttempt] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.source is not None

    @property
    def best_characters(self) -> int:
        """Longest output seen across attempts (for diagnostics)."""
        return max((a.characters for a in self.attempts), default=0)


async def run_chain(strategies: list[ExtractionStrategy], path: Path) -> ChainOutcome:
    """Try strategies in order and return the first accepted output."""
    outcome = ChainOutcome()
    try:
        for strategy in strategies:
            set_strategy_context(strategy.name)

            if strategy.is_available is not None and not strategy.is_available():
                logger.info("Skipping %s: not available", strategy.name)
                outcome.attempts.append(StrategyAttempt(name=strategy.name, skipped=True))
                continue

            try:
                text = await strategy.run(path)
            except Exception as e:
                logger.warning("%s extraction failed: %s", strategy.name, e)
                outcome.attempts.append(StrategyAttempt(name=strategy.name, error=str(e)))
                continue

            text = text or ""
            chars = len(text.strip())
            if meets_threshold(text, strategy.min_chars):
                logger.info("%s extraction accepted: %d characters", strategy.name, len(text))
                outcome.attempts.append(
                    StrategyAttempt(name=strategy.name, characters=chars, accepted=True)
                )
                outcome.text = text
                outcome.source = strategy.source
                return outcome

            logger.warning(
                "%s extraction yielded minimal text (%d chars), falling back",
                strategy.name, chars,
            )
            outcome.attempts.append(StrategyAttempt(name=strategy.name, characters=chars))
    finally:
        set_strategy_context(None)

    return outcome
