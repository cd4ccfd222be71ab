"""
Tests for newsdesk.utils: JSON cleanup, dates, async bridge and logging.

Run with: pytest tests/test_utils.py -v
"""

import asyncio
import json
from datetime import date

import pytest

from newsdesk.utils import (
    configure_logging,
    get_logger,
    masthead_date,
    parse_llm_json,
    press_date,
    run_sync,
    strip_code_fences,
    utc_now,
)
from newsdesk.utils.logging import mask_secret, redact_secrets


class TestStripCodeFences:
    """Markdown fence removal."""

    @pytest.mark.parametrize("text,expected", [
        ('```json\n{"a": 1}\n```', '{"a": 1}'),
        ('```\n{"a": 1}\n```', '{"a": 1}'),
        ('  {"a": 1}\n', '{"a": 1}'),
        ('{"a": 1}', '{"a": 1}'),
        ("", ""),
        (None, ""),
    ])
    def test_strip(self, text, expected):
        assert strip_code_fences(text) == expected

    def test_fences_inside_text_are_removed_too(self):
        assert strip_code_fences('{"a": "x```y"}') == '{"a": "xy"}'


class TestParseLlmJson:
    """Strict parse after cleanup."""

    def test_fenced_object(self):
        assert parse_llm_json('```json\n{"headline": "X"}\n```') == {"headline": "X"}

    def test_array_is_returned_as_is(self):
        assert parse_llm_json("[1, 2]") == [1, 2]

    @pytest.mark.parametrize("text", [
        "Sure! Here it is: {\"a\": 1}",
        '{"a": 1} trailing words',
        "",
        None,
    ])
    def test_no_repair(self, text):
        with pytest.raises(json.JSONDecodeError):
            parse_llm_json(text)


class TestDates:
    """Newspaper date formats."""

    def test_press_date(self):
        assert press_date(date(2023, 10, 24)) == "October 24, 2023"

    def test_no_zero_padding(self):
        assert press_date(date(2024, 3, 5)) == "March 5, 2024"

    def test_masthead_date(self):
        assert masthead_date(date(2023, 10, 24)) == "Tuesday, October 24, 2023"

    def test_defaults_to_today_utc(self):
        assert press_date() == press_date(utc_now().date())


class TestRunSync:
    """Async bridge for the Streamlit script."""

    def test_without_running_loop(self):
        async def answer():
            return 42

        assert run_sync(answer()) == 42

    @pytest.mark.asyncio
    async def test_inside_running_loop(self):
        async def answer():
            await asyncio.sleep(0)
            return "ok"

        assert run_sync(answer()) == "ok"

    def test_exception_propagates(self):
        async def boom():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            run_sync(boom())


class TestLogging:
    """structlog setup."""

    def test_configure_creates_log_file(self, tmp_path):
        log_dir = tmp_path / "logs"
        configure_logging(log_dir=str(log_dir), level="DEBUG")
        get_logger("test").info("hello", topic="t")
        assert (log_dir / "newsdesk.jsonl").exists()

    def test_credential_fields_masked(self):
        event = redact_secrets(None, "info", {"event": "x", "api_key": "secret-value", "GEMINI_API_KEY": "abcd1234"})
        assert event["api_key"] == "secr********"
        assert event["GEMINI_API_KEY"] == "abcd****"
        assert event["event"] == "x"

    def test_key_in_error_text_masked(self):
        key = "AIza" + "B" * 35
        event = redact_secrets(None, "error", {"error": f"400 Bad Request for url ...?key={key}", "code": 400})
        assert key not in event["error"]
        assert event["error"].startswith("400 Bad Request for url ...?key=AIza*")
        assert event["code"] == 400

    def test_env_var_names_left_alone(self):
        event = redact_secrets(None, "info", {"env_var": "GEMINI_API_KEY"})
        assert event["env_var"] == "GEMINI_API_KEY"

    def test_mask_secret_short_and_empty(self):
        assert mask_secret("") == "[NOT_SET]"
        assert mask_secret("abc") == "***"

    def test_get_logger_binds(self):
        log = get_logger("newsdesk.test").bind(topic="t")
        assert hasattr(log, "info")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
