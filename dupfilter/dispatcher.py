"""Fan-out of records to any number of sinks."""

import logging
import sys
from typing import Callable, Iterable, TextIO

from dupfilter.formatter import format_text
from dupfilter.locks import NullLock
from dupfilter.record import LogRecord

logger = logging.getLogger(__name__)

Sink = Callable[[LogRecord], None]


class Dispatcher:
    """Ordered list of sinks; forward() hands a record to each in turn.

    A sink that raises stops the fan-out and the error reaches the caller.
    """

    def __init__(self, sinks: Iterable[Sink] | None = None, lock=None):
        self._sinks: list[Sink] = list(sinks or [])
        self._lock = lock if lock is not None else NullLock()

    @property
    def sinks(self) -> tuple[Sink, ...]:
        with self._lock:
            return tuple(self._sinks)

    def add_sink(self, sink: Sink):
        with self._lock:
            self._sinks.append(sink)
        logger.info("Added sink %r", sink)

    def remove_sink(self, sink: Sink):
        """Remove *sink*; does nothing if it was never added."""
        with self._lock:
            if sink not in self._sinks:
                return
            self._sinks.remove(sink)
        logger.info("Removed sink %r", sink)

    def set_sinks(self, sinks: Iterable[Sink]):
        with self._lock:
            self._sinks = list(sinks)

    def forward(self, record: LogRecord):
        for sink in self.sinks:
            sink(record)

    __call__ = forward


class ListSink:
    """Collects every record it receives. Mostly useful in tests."""

    def __init__(self):
        self.records: list[LogRecord] = []

    def __call__(self, record: LogRecord):
        self.records.append(record)

    @property
    def messages(self) -> list[str]:
        return [r.payload for r in self.records]

    def clear(self):
        self.records.clear()


class StreamSink:
    """Writes one formatted line per record to a text stream."""

    def __init__(self, stream: TextIO | None = None,
                 formatter: Callable[[LogRecord], str] = format_text):
        self._stream = stream if stream is not None else sys.stdout
        self._formatter = formatter

    def __call__(self, record: LogRecord):
        self._stream.write(self._formatter(record) + "\n")
        self._stream.flush()

    def __repr__(self) -> str:
        name = getattr(self._stream, "name", type(self._stream).__name__)
        return f"StreamSink({name})"
