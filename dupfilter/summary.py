"""Summary records: one synthetic record standing in for a skip run."""

import logging
from datetime import datetime
from typing import Callable

from dupfilter.record import LogRecord
from dupfilter.state import SkipRun

logger = logging.getLogger(__name__)

SUMMARY_TEMPLATE = "Skipped {count} duplicate messages with step {period} from {start} to {end}."

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def format_timestamp(ts: datetime) -> str:
    return ts.strftime(TIMESTAMP_FORMAT)


def format_summary(run: SkipRun) -> str:
    return SUMMARY_TEMPLATE.format(
        count=run.skipped_count,
        period=run.period,
        start=format_timestamp(run.start_time),
        end=format_timestamp(run.end_time),
    )


def build_summary(run: SkipRun, template: LogRecord, level: str) -> LogRecord:
    """Build the summary record for *run*.

    Timestamp, source and logger come from *template*, the last record that
    still matched the pattern.
    """
    return LogRecord(
        timestamp=template.timestamp,
        logger_name=template.logger_name,
        level=level,
        payload=format_summary(run),
        source=template.source,
    )


class SummaryEmitter:
    def __init__(self, forward: Callable[[LogRecord], None], level: str):
        self._forward = forward
        self._level = level

    @property
    def level(self) -> str:
        return self._level

    def emit(self, run: SkipRun, template: LogRecord) -> LogRecord:
        """Forward one summary record and return it."""
        record = build_summary(run, template, self._level)
        logger.debug(
            "Skip run finished: %d records with step %d",
            run.skipped_count, run.period,
        )
        self._forward(record)
        return record
