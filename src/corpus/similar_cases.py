# src/corpus/similar_cases.py — v1
"""Similar-case lookup by court tier.

The case-file corpus is laid out as <root>/level-<tier>/<bucket>/<files>.
Lookup samples one bucket at random; there is no content similarity.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path

logger = logging.getLogger(__name__)

MIN_TIER = 1
MAX_TIER = 4

# Checked in order; first keyword found in the court level wins.
_TIER_KEYWORDS: tuple[tuple[str, int], ...] = (
    ("commissioner", 1),
    ("tribunal", 2),
    ("itat", 2),
    ("cestat", 2),
    ("high", 3),
    ("supreme", 4),
)


def court_level_tier(court_level: str | None) -> int:
    """Map a free-text court level onto tiers 1 (lowest) to 4."""
    level = (court_level or "").lower()
    for keyword, tier in _TIER_KEYWORDS:
        if keyword in level:
            return tier
    return MIN_TIER


def find_similar_cases(
    tier: int,
    limit: int = 2,
    root: Path | str = Path("case-files"),
    rng: random.Random | None = None,
) -> list[Path]:
    """Return up to `limit` files from a random bucket of a tier.

    An absent or empty tier directory gives an empty list.

    Raises:
        ValueError: If tier is outside 1..4.
    """
    if not MIN_TIER <= tier <= MAX_TIER:
        raise ValueError(f"Court tier must be between {MIN_TIER} and {MAX_TIER}, got {tier}")
    if limit <= 0:
        return []

    tier_dir = Path(root) / f"level-{tier}"
    if not tier_dir.is_dir():
        logger.info("No case files for tier %d at %s", tier, tier_dir)
        return []

    buckets = sorted(p for p in tier_dir.iterdir() if p.is_dir())
    if not buckets:
        return []

    bucket = (rng or random).choice(buckets)
    files = sorted((p for p in bucket.iterdir() if p.is_file()), key=lambda p: p.name)
    logger.debug("Selected %s with %d files", bucket.name, len(files))
    return files[:limit]
