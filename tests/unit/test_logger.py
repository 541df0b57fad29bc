"""Unit tests for logging infrastructure."""

import json
import logging
import sys

from src.utils.logger import JSONFormatter, RichTextFormatter, get_logger, logger


def _record(msg: str = "Test message", level: int = logging.INFO, exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test_logger",
        level=level,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Test JSONFormatter produces valid JSON output."""

    def test_json_formatter_outputs_valid_json(self):
        """Test that JSONFormatter produces valid JSON."""
        parsed = json.loads(JSONFormatter().format(_record()))

        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test_logger"
        assert parsed["message"] == "Test message"
        assert "timestamp" in parsed

    def test_json_formatter_includes_exception_traceback(self):
        """Test that JSONFormatter includes exception traceback when present."""
        try:
            raise ValueError("Test error")
        except ValueError:
            record = _record("Error occurred", logging.ERROR, exc_info=sys.exc_info())

        parsed = json.loads(JSONFormatter().format(record))

        assert "exception" in parsed
        assert "ValueError: Test error" in parsed["exception"]

    def test_json_formatter_includes_generation_context(self):
        """request_id, tab and generator extras are copied into the output."""
        record = _record(request_id="abc123", tab="search", generator="fallback")

        parsed = json.loads(JSONFormatter().format(record))

        assert parsed["request_id"] == "abc123"
        assert parsed["tab"] == "search"
        assert parsed["generator"] == "fallback"

    def test_json_formatter_keeps_non_ascii(self):
        parsed_text = JSONFormatter().format(_record("Pastéis de nata"))
        assert "Pastéis de nata" in parsed_text


class TestRichTextFormatter:
    """Test colored text output."""

    def test_text_formatter_contains_level_and_message(self):
        output = RichTextFormatter().format(_record("hello", logging.WARNING))
        assert "WARNING" in output
        assert "hello" in output
        assert output.startswith(RichTextFormatter.COLORS["WARNING"])

    def test_text_formatter_shows_request_id(self):
        output = RichTextFormatter().format(_record("hello", request_id="r-1"))
        assert "[req r-1]" in output


class TestGetLogger:
    """Test logger factory."""

    def test_module_logger_name(self):
        assert logger.name == "pantry_chef"

    def test_get_logger_is_idempotent(self):
        first = get_logger("pantry_chef.test_idempotent")
        second = get_logger("pantry_chef.test_idempotent")
        assert first is second
        assert len(second.handlers) == 1

    def test_json_log_type_selects_json_formatter(self, monkeypatch):
        monkeypatch.setenv("LOG_TYPE", "json")
        instance = get_logger("pantry_chef.test_json_type")
        assert isinstance(instance.handlers[0].formatter, JSONFormatter)

    def test_log_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        instance = get_logger("pantry_chef.test_debug_level")
        assert instance.level == logging.DEBUG
