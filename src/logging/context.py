# src/logging/context.py — v2
"""Contextual logging support: attach case file and strategy to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per analysis request.
_case_file: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "case_file", default=None
)
_strategy: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "strategy", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    case_file: str | None = None
    strategy: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(case_file=_case_file.get(), strategy=_strategy.get())


def set_case_context(case_file: str) -> None:
    """Set request-level context (called once per analyzed document)."""
    _case_file.set(case_file)


def set_strategy_context(strategy: str | None) -> None:
    """Set the extraction strategy currently running."""
    _strategy.set(strategy)


def clear_context() -> None:
    """Reset all context variables."""
    _case_file.set(None)
    _strategy.set(None)
