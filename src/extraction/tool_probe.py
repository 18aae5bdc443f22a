# src/extraction/tool_probe.py — v1
"""Detect the external OCR binaries needed by the command-line OCR runner."""

from __future__ import annotations

import logging
import shutil

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

REQUIRED_TOOLS: tuple[str, ...] = ("pdftoppm", "tesseract")


class ToolAvailability(BaseModel):
    """Outcome of a tool probe."""

    model_config = ConfigDict(frozen=True)

    available: bool
    tool_paths: dict[str, str] = Field(default_factory=dict)
    missing: list[str] = Field(default_factory=list)


class CommandToolProbe:
    """Resolves absolute paths of the OCR binaries, once per instance.

    A missing tool is a negative result, never an error.
    """

    def __init__(self, tools: tuple[str, ...] = REQUIRED_TOOLS) -> None:
        self._tools = tools
        self._result: ToolAvailability | None = None

    def check_availability(self) -> ToolAvailability:
        """Return (and memoize) which tools are on PATH."""
        if self._result is None:
            self._result = self._probe()
        return self._result

    def is_available(self) -> bool:
        return self.check_availability().available

    def _probe(self) -> ToolAvailability:
        paths: dict[str, str] = {}
        missing: list[str] = []
        for tool in self._tools:
            try:
                resolved = shutil.which(tool)
            except OSError as e:
                logger.debug("Lookup of %s failed: %s", tool, e)
                resolved = None
            if resolved:
                paths[tool] = resolved
            else:
                missing.append(tool)

        if missing:
            logger.warning(
                "Command-line tools not found (%s). Command-line OCR will not be available.",
                ", ".join(missing),
            )
            return ToolAvailability(available=False, tool_paths=paths, missing=missing)

        logger.debug("OCR tools found: %s", paths)
        return ToolAvailability(available=True, tool_paths=paths)
