"""Multi-line duplicate filter.

Detects cyclic repetition (period 1..max_period) at the end of the recent
history and collapses each repeated run into a single summary record:

    Hello1, Hello2, Hello3, Hello1, Hello2, Hello3, ... x10, Different Hello

is forwarded as the first two cycles, then

    Skipped 24 duplicate messages with step 3 from <t0> to <t1>.
    Different Hello

The record that confirms a new period is still forwarded; suppression
starts with the next record that continues the pattern.
"""

import logging
import threading
from typing import Callable

from dupfilter.detector import find_period
from dupfilter.dispatcher import Dispatcher
from dupfilter.locks import NullLock
from dupfilter.metrics import FilterMetrics
from dupfilter.record import LogRecord, normalize_level
from dupfilter.state import SkipState
from dupfilter.summary import SummaryEmitter
from dupfilter.window import Window

logger = logging.getLogger(__name__)

DEFAULT_MAX_PERIOD = 8
DEFAULT_NOTIFICATION_LEVEL = "info"


class MultiDupFilter:
    def __init__(self, max_period: int = DEFAULT_MAX_PERIOD,
                 notification_level: str = DEFAULT_NOTIFICATION_LEVEL,
                 forward: Callable[[LogRecord], None] | Dispatcher | None = None,
                 lock=None):
        if max_period < 1:
            raise ValueError(f"max_period must be >= 1, got {max_period}")

        self._max_period = max_period
        self._notification_level = normalize_level(notification_level)
        self._lock = lock if lock is not None else NullLock()

        if forward is None:
            forward = Dispatcher()
        self._dispatcher = forward if isinstance(forward, Dispatcher) else None
        self._forward = forward.forward if hasattr(forward, "forward") else forward

        self._window = Window(max_period)
        self._state = SkipState()
        self._emitter = SummaryEmitter(self._forward, self._notification_level)
        self._metrics = FilterMetrics()

    @property
    def max_period(self) -> int:
        return self._max_period

    @property
    def notification_level(self) -> str:
        return self._notification_level

    @property
    def dispatcher(self) -> Dispatcher | None:
        return self._dispatcher

    @property
    def window(self) -> Window:
        return self._window

    @property
    def state(self) -> SkipState:
        return self._state

    @property
    def metrics(self) -> FilterMetrics:
        return self._metrics

    def process(self, record: LogRecord):
        """Take one record; forward it, absorb it, or summarize a run first."""
        with self._lock:
            self._process_locked(record)

    def flush(self):
        """Emit the summary of a pending skip run, if any, and return to Idle.

        Meant for end of stream: without it a stream that stops inside a run
        would never report the records it absorbed.
        """
        with self._lock:
            if not self._state.active:
                return
            newest = self._window.at(0)
            period = self._state.period
            run = self._state.finish(newest.timestamp)
            if run is not None:
                self._emit_summary(run, newest)
            logger.debug("Flushed skip state for step %d", period)

    def reset(self):
        """Forget all history, as if freshly constructed."""
        with self._lock:
            self._window.clear()
            self._state.reset()
            self._metrics.reset()

    def _process_locked(self, record: LogRecord):
        self._metrics.received += 1
        self._window.append(record)
        self._window.evict_if_over_capacity()

        if self._state.active:
            period = self._state.period
            if self._window.text_at(0) == self._window.text_at(period):
                self._state.absorb(record.timestamp)
                self._metrics.skipped += 1
                return

            # the previous record was the last one still in the pattern
            last_match = self._window.at(1)
            run = self._state.finish(last_match.timestamp)
            if run is not None:
                self._emit_summary(run, last_match)
        else:
            period = find_period(self._window, self._max_period)
            if period is not None:
                self._state.begin(period)
                self._metrics.runs_detected += 1
                logger.debug("Detected repeating pattern with step %d", period)

        self._metrics.forwarded += 1
        self._forward(record)

    def _emit_summary(self, run, template: LogRecord):
        self._metrics.summaries += 1
        self._emitter.emit(run, template)


def multi_dup_filter_mt(max_period: int = DEFAULT_MAX_PERIOD,
                        notification_level: str = DEFAULT_NOTIFICATION_LEVEL,
                        forward=None) -> MultiDupFilter:
    """Filter guarded by a threading.Lock, safe to share between threads."""
    return MultiDupFilter(max_period, notification_level, forward, lock=threading.Lock())


def multi_dup_filter_st(max_period: int = DEFAULT_MAX_PERIOD,
                        notification_level: str = DEFAULT_NOTIFICATION_LEVEL,
                        forward=None) -> MultiDupFilter:
    """Filter with no locking, for single-threaded use."""
    return MultiDupFilter(max_period, notification_level, forward, lock=NullLock())
