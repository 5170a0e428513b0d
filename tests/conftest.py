"""Shared pytest fixtures for the multi-dup-filter test suite."""

from datetime import datetime, timedelta

import pytest

from dupfilter.dispatcher import ListSink
from dupfilter.record import LogRecord, SourceLoc

BASE_TIME = datetime(2024, 7, 25, 9, 48, 21)


class RecordFactory:
    """Builds records one millisecond apart, like a fast-logging producer."""

    def __init__(self, logger_name: str = "logger"):
        self._logger_name = logger_name
        self._count = 0

    def __call__(self, payload: str, level: str = "info") -> LogRecord:
        ts = BASE_TIME + timedelta(milliseconds=self._count)
        self._count += 1
        return LogRecord(
            timestamp=ts,
            logger_name=self._logger_name,
            level=level,
            payload=payload,
            source=SourceLoc("app.py", self._count, "main"),
        )

    def many(self, payloads) -> list[LogRecord]:
        return [self(p) for p in payloads]


@pytest.fixture()
def make_record() -> RecordFactory:
    return RecordFactory()


@pytest.fixture()
def sink() -> ListSink:
    return ListSink()


@pytest.fixture()
def hello_stream() -> list[str]:
    """10 cycles of Hello1..Hello3 followed by one different line."""
    return ["Hello1", "Hello2", "Hello3"] * 10 + ["Different Hello"]
