"""Output formatters: spdlog-style text lines and NDJSON."""

import json
from typing import Callable

from dupfilter.record import LogRecord


def format_text(record: LogRecord) -> str:
    """Return '[YYYY-MM-DD HH:MM:SS.mmm] [logger] [level] payload'."""
    ts = record.timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    return f"[{ts}] [{record.logger_name}] [{record.level}] {record.payload}"


def format_json(record: LogRecord) -> str:
    """Return one JSON object per line, compatible with jq."""
    data = {
        "timestamp": record.timestamp.isoformat(),
        "logger": record.logger_name,
        "level": record.level,
        "message": record.payload,
    }
    if record.source.filename:
        data["source"] = {
            "filename": record.source.filename,
            "line": record.source.line,
            "funcname": record.source.funcname,
        }
    return json.dumps(data)


FORMATTERS = {
    "text": format_text,
    "json": format_json,
}


def get_formatter(output_format: str = "text") -> Callable[[LogRecord], str]:
    """Return the formatter registered under *output_format*."""
    try:
        return FORMATTERS[output_format]
    except KeyError:
        raise ValueError(f"unknown output format: {output_format!r}") from None
