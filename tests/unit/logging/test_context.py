# tests/unit/logging/test_context.py — v2
"""Tests for logging/context.py — contextvars-based log context."""

from __future__ import annotations

import asyncio

import pytest

from caselens.logging.context import (
    clear_context,
    get_context,
    set_case_context,
    set_strategy_context,
)


class TestLogContext:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_empty(self):
        ctx = get_context()
        assert ctx.case_file is None
        assert ctx.as_dict() == {}

    def test_set_and_get(self):
        set_case_context("a.pdf")
        set_strategy_context("standard")
        assert get_context().as_dict() == {"case_file": "a.pdf", "strategy": "standard"}

    def test_strategy_reset(self):
        set_strategy_context("enhanced")
        set_strategy_context(None)
        assert get_context().strategy is None

    def test_clear(self):
        set_case_context("a.pdf")
        clear_context()
        assert get_context().case_file is None

    @pytest.mark.asyncio
    async def test_isolated_between_tasks(self):
        async def worker(name: str) -> str | None:
            set_case_context(name)
            await asyncio.sleep(0)
            return get_context().case_file

        results = await asyncio.gather(worker("one.pdf"), worker("two.pdf"))
        assert results == ["one.pdf", "two.pdf"]
