"""Tests for output formatters."""

import json
from datetime import datetime

import pytest

from dupfilter.formatter import format_json, format_text, get_formatter
from dupfilter.record import LogRecord, SourceLoc

RECORD = LogRecord(
    timestamp=datetime(2024, 7, 25, 9, 48, 21, 919876),
    logger_name="logger",
    level="info",
    payload="Hello1",
)


class TestFormatText:
    def test_spdlog_layout(self):
        assert format_text(RECORD) == "[2024-07-25 09:48:21.919] [logger] [info] Hello1"

    def test_empty_payload(self):
        record = LogRecord(RECORD.timestamp, "l", "error", "")
        assert format_text(record).endswith("[l] [error] ")


class TestFormatJson:
    def test_fields(self):
        data = json.loads(format_json(RECORD))
        assert data == {
            "timestamp": "2024-07-25T09:48:21.919876",
            "logger": "logger",
            "level": "info",
            "message": "Hello1",
        }

    def test_source_included_when_known(self):
        record = LogRecord(RECORD.timestamp, "l", "info", "m", SourceLoc("a.py", 3, "f"))
        data = json.loads(format_json(record))
        assert data["source"] == {"filename": "a.py", "line": 3, "funcname": "f"}


class TestGetFormatter:
    def test_known(self):
        assert get_formatter("text") is format_text
        assert get_formatter("json") is format_json

    def test_default(self):
        assert get_formatter() is format_text

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_formatter("xml")
