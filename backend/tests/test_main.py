"""
Tests for prompts.py, gateway.py and the log level setup in main.py.
Gateway tests use the fake Anthropic client from conftest.
"""
import asyncio
import logging
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import anthropic

from task_prioritizer import gateway
from task_prioritizer.gateway import GatewayError, generate_text
from task_prioritizer.main import resolve_log_level
from task_prioritizer.prompts import CATEGORIZE_PROMPT, build_categorize_prompt


class TestCategorizePrompt:
    """Tests for the categorization prompt."""

    def test_prompt_has_tasks_placeholder(self):
        assert "{tasks}" in CATEGORIZE_PROMPT

    def test_prompt_names_all_buckets(self):
        prompt = build_categorize_prompt("x")
        for key in ("highPriority", "mediumPriority", "lowPriority"):
            assert '{"%s": []}' % key in prompt

    def test_tasks_appended_verbatim(self):
        """Raw input, braces and newlines included, ends the prompt unchanged."""
        tasks = "Pay rent\nFix {bug} in parser\n  call mom  "
        assert build_categorize_prompt(tasks).endswith("Tasks to categorize:\n" + tasks)


class TestGateway:
    """Tests for generate_text."""

    def test_returns_model_text(self, fake_messages):
        fake_messages.text = '[{"highPriority": ["A"]}]'
        assert asyncio.run(generate_text("hello")) == '[{"highPriority": ["A"]}]'

    def test_prompt_forwarded_verbatim(self, fake_messages):
        asyncio.run(generate_text("  exact prompt\n"))
        call = fake_messages.calls[0]
        assert call["messages"] == [{"role": "user", "content": "  exact prompt\n"}]
        assert call["model"] == gateway.ANTHROPIC_MODEL

    def test_backend_error_raises_gateway_error(self, fake_messages):
        fake_messages.error = anthropic.AnthropicError("boom")
        with pytest.raises(GatewayError):
            asyncio.run(generate_text("hello"))

    def test_missing_api_key_fails_at_call_time(self, monkeypatch):
        monkeypatch.setattr(gateway, "ANTHROPIC_API_KEY", None)
        monkeypatch.setattr(gateway, "_client", None)
        with pytest.raises(GatewayError):
            asyncio.run(generate_text("hello"))

    def test_placeholder_api_key_fails_at_call_time(self, monkeypatch):
        """The .env.example placeholder counts as a missing key."""
        monkeypatch.setattr(gateway, "ANTHROPIC_API_KEY", "your-api-key-here")
        monkeypatch.setattr(gateway, "_client", None)
        with pytest.raises(GatewayError):
            asyncio.run(generate_text("hello"))

    def test_truncated_reply_raises_gateway_error(self, fake_messages):
        """A reply cut off at max_tokens is reported as a backend failure, not returned."""
        fake_messages.text = '[{"highPriority": ["A", "B'
        fake_messages.stop_reason = "max_tokens"
        with pytest.raises(GatewayError):
            asyncio.run(generate_text("hello"))


class TestLogLevel:
    """Tests for LOG_LEVEL resolution."""

    @pytest.mark.parametrize("name,expected", [
        ("debug", logging.DEBUG),
        ("WARNING", logging.WARNING),
        (None, logging.INFO),
        ("verbose", logging.INFO),
        ("", logging.INFO),
    ])
    def test_resolve_log_level(self, name, expected):
        assert resolve_log_level(name) == expected
