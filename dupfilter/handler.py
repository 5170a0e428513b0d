"""logging.Handler front end: drop-in duplicate suppression for stdlib loggers.

    handler = MultiDupFilterHandler(max_period=10, targets=[logging.StreamHandler()])
    logging.getLogger("app").addHandler(handler)

Records that survive the filter, and the summary records it synthesizes,
are passed on to every target handler whose level admits them.
"""

import logging
from typing import Iterable

from dupfilter.filter import DEFAULT_MAX_PERIOD, DEFAULT_NOTIFICATION_LEVEL, multi_dup_filter_st
from dupfilter.record import LogRecord, from_logging_record, to_logging_record

_PACKAGE = "dupfilter"


def _not_own_record(record: logging.LogRecord) -> bool:
    # the filter's own diagnostics must not be fed back into it
    return record.name != _PACKAGE and not record.name.startswith(_PACKAGE + ".")


class MultiDupFilterHandler(logging.Handler):
    def __init__(self, max_period: int = DEFAULT_MAX_PERIOD,
                 notification_level: str = DEFAULT_NOTIFICATION_LEVEL,
                 targets: Iterable[logging.Handler] | None = None,
                 level: int = logging.NOTSET):
        super().__init__(level)
        self._targets: list[logging.Handler] = list(targets or [])
        # Handler.handle() already holds self.lock around emit()
        self._filter = multi_dup_filter_st(max_period, notification_level, forward=self._dispatch)
        self._current: tuple[LogRecord, logging.LogRecord] | None = None
        self.addFilter(_not_own_record)

    @property
    def filter_core(self):
        return self._filter

    @property
    def targets(self) -> tuple[logging.Handler, ...]:
        return tuple(self._targets)

    def add_target(self, target: logging.Handler):
        self.acquire()
        try:
            self._targets.append(target)
        finally:
            self.release()

    def remove_target(self, target: logging.Handler):
        self.acquire()
        try:
            if target in self._targets:
                self._targets.remove(target)
        finally:
            self.release()

    def emit(self, record: logging.LogRecord):
        try:
            converted = from_logging_record(record)
            # a target may log back into this handler; keep the outer record
            previous = self._current
            self._current = (converted, record)
            try:
                self._filter.process(converted)
            finally:
                self._current = previous
        except Exception:
            self.handleError(record)

    def flush(self):
        """Report any pending skip run, then flush the targets."""
        self.acquire()
        try:
            self._filter.flush()
            for target in self._targets:
                target.flush()
        finally:
            self.release()

    def close(self):
        try:
            self.flush()
        finally:
            super().close()

    def _dispatch(self, record: LogRecord):
        if self._current is not None and record is self._current[0]:
            # pass the caller's own record through untouched (keeps exc_info, extras)
            out = self._current[1]
        else:
            out = to_logging_record(record)
        for target in self._targets:
            if out.levelno >= target.level:
                target.handle(out)
