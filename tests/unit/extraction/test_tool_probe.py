# tests/unit/extraction/test_tool_probe.py — v1
"""Tests for extraction/tool_probe.py — binary detection, memoized."""

from __future__ import annotations

from unittest.mock import patch

from caselens.extraction.tool_probe import REQUIRED_TOOLS, CommandToolProbe


def _which(found: dict[str, str]):
    return lambda tool: found.get(tool)


class TestCommandToolProbe:
    def test_required_tools(self):
        assert REQUIRED_TOOLS == ("pdftoppm", "tesseract")

    def test_all_present(self):
        paths = {"pdftoppm": "/usr/bin/pdftoppm", "tesseract": "/usr/bin/tesseract"}
        with patch("caselens.extraction.tool_probe.shutil.which", side_effect=_which(paths)):
            result = CommandToolProbe().check_availability()
        assert result.available is True
        assert result.tool_paths == paths
        assert result.missing == []

    def test_one_missing(self):
        paths = {"pdftoppm": "/usr/bin/pdftoppm"}
        with patch("caselens.extraction.tool_probe.shutil.which", side_effect=_which(paths)):
            result = CommandToolProbe().check_availability()
        assert result.available is False
        assert result.missing == ["tesseract"]

    def test_lookup_error_is_negative(self):
        with patch("caselens.extraction.tool_probe.shutil.which", side_effect=OSError("boom")):
            probe = CommandToolProbe()
            assert probe.is_available() is False

    def test_memoized(self):
        with patch("caselens.extraction.tool_probe.shutil.which", return_value="/bin/x") as which:
            probe = CommandToolProbe()
            first = probe.check_availability()
            second = probe.check_availability()
        assert first is second
        assert which.call_count == len(REQUIRED_TOOLS)

    def test_nonexistent_tool_real_lookup(self):
        probe = CommandToolProbe(tools=("caselens-no-such-binary-xyz",))
        assert probe.is_available() is False
