# tests/unit/logging/test_handlers.py — v2
"""Tests for logging/handlers.py — size parsing and rotating handler."""

from __future__ import annotations

import pytest

from caselens.logging.handlers import create_rotating_handler, parse_size


class TestParseSize:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("10MB", 10 * 1024**2),
            ("512 KB", 512 * 1024),
            ("1gb", 1024**3),
            ("100B", 100),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_size(value) == expected

    @pytest.mark.parametrize("value", ["", "ten MB", "10TB", "MB"])
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="Invalid size format"):
            parse_size(value)


class TestCreateRotatingHandler:
    def test_creates_directory(self, tmp_path):
        log_file = tmp_path / "nested" / "app.log"
        handler = create_rotating_handler(log_file, rotation="1MB", retention=3)
        try:
            assert log_file.parent.is_dir()
            assert handler.maxBytes == 1024**2
            assert handler.backupCount == 3
        finally:
            handler.close()
