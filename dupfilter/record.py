"""Log record model: frozen dataclasses shared by every stage."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

LEVELS = ("trace", "debug", "info", "warning", "error", "critical", "off")

LOGGING_LEVELS = {
    "trace": 5,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "off": logging.CRITICAL + 10,
}

_ALIASES = {
    "warn": "warning",
    "err": "error",
    "fatal": "critical",
}


def normalize_level(level: str) -> str:
    """Return the canonical lower-case level name, or raise ValueError."""
    normalized = level.strip().lower()
    normalized = _ALIASES.get(normalized, normalized)
    if normalized not in LEVELS:
        raise ValueError(f"unknown log level: {level!r}")
    return normalized


def level_index(level: str) -> int:
    """Return the position of a log level in LEVELS, or -1 if unknown."""
    try:
        return LEVELS.index(normalize_level(level))
    except ValueError:
        return -1


@dataclass(frozen=True)
class SourceLoc:
    filename: str = ""
    line: int = 0
    funcname: str = ""

    @classmethod
    def empty(cls) -> "SourceLoc":
        return cls()


@dataclass(frozen=True)
class LogRecord:
    timestamp: datetime
    logger_name: str
    level: str
    payload: str
    source: SourceLoc = field(default_factory=SourceLoc)


def to_logging_level(level: str) -> int:
    """Map a level name onto the numeric levels of the logging module."""
    return LOGGING_LEVELS[normalize_level(level)]


def _level_for_levelno(levelno: int) -> str:
    for name in ("critical", "error", "warning", "info", "debug"):
        if levelno >= LOGGING_LEVELS[name]:
            return name
    return "trace"


def from_logging_record(record: logging.LogRecord) -> LogRecord:
    """Convert a stdlib logging record into a LogRecord."""
    try:
        level = normalize_level(record.levelname)
    except ValueError:
        # NOTSET and custom level names
        level = _level_for_levelno(record.levelno)

    return LogRecord(
        timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
        logger_name=record.name,
        level=level,
        payload=record.getMessage(),
        source=SourceLoc(
            filename=record.pathname or "",
            line=record.lineno or 0,
            funcname=record.funcName or "",
        ),
    )


def to_logging_record(record: LogRecord) -> logging.LogRecord:
    """Build a stdlib logging record carrying the same fields."""
    out = logging.LogRecord(
        name=record.logger_name,
        level=to_logging_level(record.level),
        pathname=record.source.filename,
        lineno=record.source.line,
        msg=record.payload,
        args=None,
        exc_info=None,
        func=record.source.funcname or None,
    )
    created = record.timestamp.timestamp()
    out.created = created
    out.msecs = (created - int(created)) * 1000
    return out
