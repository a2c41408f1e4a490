"""Tests for vmremote.utils module."""

from __future__ import annotations

import pytest

from vmremote.exceptions import ConfigError
from vmremote.utils import (
    describe_exception,
    format_stack_trail,
    get_env,
    log,
    parse_port,
)


class TestLog:
    def test_info_level(self, capsys):
        log("INFO", "test message")
        captured = capsys.readouterr()
        assert "[INFO]" in captured.out
        assert "test message" in captured.out

    def test_debug_suppressed_by_default(self, capsys):
        log("DEBUG", "should not appear")
        captured = capsys.readouterr()
        assert captured.out == ""

    def test_unknown_level_uncoloured(self, capsys):
        log("TRACE", "plain")
        assert capsys.readouterr().out == "[TRACE] plain\n"


class TestGetEnv:
    def test_returns_value(self, monkeypatch):
        monkeypatch.setenv("TEST_VAR", "hello")
        assert get_env("TEST_VAR") == "hello"

    def test_returns_default(self, monkeypatch):
        monkeypatch.delenv("TEST_VAR", raising=False)
        assert get_env("TEST_VAR", "fallback") == "fallback"


class TestParsePort:
    @pytest.mark.parametrize("raw, expected", [("8270", 8270), ("0", 0), ("65535", 65535), (" 80 ", 80)])
    def test_valid(self, raw, expected):
        assert parse_port(raw) == expected

    def test_not_integer(self):
        with pytest.raises(ConfigError, match="port must be an integer"):
            parse_port("eighty")

    def test_out_of_range(self):
        with pytest.raises(ConfigError, match="between 0 and 65535"):
            parse_port("70000")


class TestDescribeException:
    def test_message(self):
        assert describe_exception(ValueError("bad value")) == "bad value"

    def test_empty_message_uses_class_name(self):
        assert describe_exception(KeyError()) == "KeyError"


class TestFormatStackTrail:
    def test_raised_exception(self):
        def explode():
            raise RuntimeError("boom")

        try:
            explode()
        except RuntimeError as exc:
            trail = format_stack_trail(exc)
        assert "in explode" in trail
        assert 'raise RuntimeError("boom")' in trail

    def test_never_raised(self):
        assert format_stack_trail(RuntimeError("fresh")) == ""
