# src/extraction/ocr/cli_runner.py — v2
"""Command-line OCR: pdftoppm rasterizes, tesseract reads each page image."""

from __future__ import annotations

import asyncio
import logging
import tempfile
from pathlib import Path

from caselens.extraction.ocr.base_ocr_runner import (
    PAGE_SEPARATOR,
    BaseOcrRunner,
    OcrError,
    remove_temp_dir,
)
from caselens.extraction.tool_probe import CommandToolProbe

logger = logging.getLogger(__name__)


class CommandLineOcrRunner(BaseOcrRunner):
    """OCR through the pdftoppm and tesseract binaries."""

    def __init__(
        self,
        probe: CommandToolProbe,
        max_pages: int = 5,
        dpi: int = 300,
        language: str = "eng",
        timeout_s: float = 300.0,
    ) -> None:
        self._probe = probe
        self._max_pages = max_pages
        self._dpi = dpi
        self._language = language
        self._timeout_s = timeout_s

    @property
    def name(self) -> str:
        return "cli-ocr"

    async def run(self, pdf_path: Path) -> str:
        tools = self._probe.check_availability()
        if not tools.available:
            raise OcrError(
                "Required command-line tools (pdftoppm, tesseract) are not installed."
            )
        pdftoppm = tools.tool_paths["pdftoppm"]
        tesseract = tools.tool_paths["tesseract"]

        temp_dir = Path(tempfile.mkdtemp(prefix="caselens_ocr_"))
        try:
            prefix = temp_dir / "page"
            try:
                await self._exec(
                    pdftoppm, "-png", "-r", str(self._dpi),
                    "-f", "1", "-l", str(self._max_pages),
                    str(pdf_path), str(prefix),
                )
            except OcrError as e:
                raise OcrError(f"pdftoppm conversion failed: {e}") from e

            images = sorted(temp_dir.glob("page*.png"))
            if not images:
                raise OcrError("No images were generated from PDF")
            logger.info("Generated %d page images from PDF", len(images))

            page_texts: list[str] = []
            for image in images:
                try:
                    stdout = await self._exec(
                        tesseract, str(image), "stdout",
                        "--oem", "1", "--psm", "3", "-l", self._language,
                    )
                except OcrError as e:
                    logger.warning("Tesseract OCR failed for %s: %s", image.name, e)
                    continue
                if stdout.strip():
                    page_texts.append(stdout)
                    logger.debug("Extracted %d characters from %s", len(stdout), image.name)

            text = PAGE_SEPARATOR.join(page_texts)
            if not text.strip():
                raise OcrError("Command-line OCR did not extract any meaningful text")
            logger.info(
                "Command-line OCR complete: %d characters from %d pages",
                len(text), len(page_texts),
            )
            return text
        finally:
            remove_temp_dir(temp_dir)

    async def _exec(self, *cmd: str) -> str:
        """Run a command, returning stdout; raise OcrError on failure or timeout."""
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(), timeout=self._timeout_s
            )
        except asyncio.TimeoutError as e:
            raise OcrError(f"{Path(cmd[0]).name} timed out after {self._timeout_s:.0f}s") from e
        finally:
            # Timed out or cancelled: the child must not outlive its temp dir.
            if proc.returncode is None:
                proc.kill()
                await proc.wait()

        if proc.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise OcrError(
                f"{Path(cmd[0]).name} exited with code {proc.returncode}: {detail}"
            )
        return stdout.decode("utf-8", errors="replace")
