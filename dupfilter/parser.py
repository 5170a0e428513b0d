"""Log line parser: turns text lines back into LogRecords."""

import re
from datetime import datetime
from typing import Callable

from dupfilter.record import LogRecord, SourceLoc, normalize_level

_TS = r"\d{4}-\d{2}-\d{2}[ T]\d{2}:\d{2}:\d{2}(?:\.\d{1,9})?"

# [2024-07-25 09:48:21.919] [logger] [info] message
FULL_PATTERN = re.compile(rf"^\[({_TS})\]\s+\[([^\]]*)\]\s+\[(\w+)\]\s?(.*)$")

# [2024-07-25 09:48:21] [INFO] message
SHORT_PATTERN = re.compile(rf"^\[({_TS})\]\s+\[(\w+)\]\s?(.*)$")


def parse_timestamp(value: str) -> datetime:
    """Parse 'YYYY-MM-DD HH:MM:SS[.fraction]'; fractions beyond microseconds are cut."""
    base, _, fraction = value.replace("T", " ").partition(".")
    ts = datetime.strptime(base, "%Y-%m-%d %H:%M:%S")
    if fraction:
        ts = ts.replace(microsecond=int(fraction[:6].ljust(6, "0")))
    return ts


def _timestamp_or_none(value: str) -> datetime | None:
    try:
        return parse_timestamp(value)
    except ValueError:
        return None


def _level_or_none(value: str) -> str | None:
    try:
        return normalize_level(value)
    except ValueError:
        return None


def parse_line(line: str, default_logger: str = "-",
               clock: Callable[[], datetime] = datetime.now,
               source_file: str = "", line_no: int = 0) -> LogRecord | None:
    """Parse one line. Returns None for blank lines.

    Lines that match neither pattern are kept whole as an info record stamped
    with clock(), so unstructured output can be filtered too.
    """
    stripped = line.rstrip("\r\n")
    if not stripped.strip():
        return None

    source = SourceLoc(filename=source_file, line=line_no)

    match = FULL_PATTERN.match(stripped)
    if match:
        ts, logger_name, level, message = match.groups()
        level, ts = _level_or_none(level), _timestamp_or_none(ts)
        if level is not None and ts is not None:
            return LogRecord(ts, logger_name, level, message, source)

    match = SHORT_PATTERN.match(stripped)
    if match:
        ts, level, message = match.groups()
        level, ts = _level_or_none(level), _timestamp_or_none(ts)
        if level is not None and ts is not None:
            return LogRecord(ts, default_logger, level, message, source)

    return LogRecord(clock(), default_logger, "info", stripped, source)
