"""Skip state machine: Idle or Skipping(period), plus run bookkeeping."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SkipRun:
    """A finished skip run, ready to be summarized."""

    period: int
    skipped_count: int
    start_time: datetime
    end_time: datetime


@dataclass
class SkipState:
    active: bool = False
    period: int = 0
    skipped_count: int = 0
    start_time: datetime | None = None
    end_time: datetime | None = None

    def begin(self, period: int):
        """Enter Skipping(period). Nothing is absorbed yet."""
        self.active = True
        self.period = period
        self.skipped_count = 0
        self.start_time = None
        self.end_time = None

    def absorb(self, timestamp: datetime):
        """Count one more record continuing the current period."""
        if self.skipped_count == 0:
            self.start_time = timestamp
        self.skipped_count += 1

    def finish(self, end_time: datetime) -> SkipRun | None:
        """End the current run and go back to Idle.

        Returns the run when at least one record was absorbed, None otherwise.
        """
        self.end_time = end_time
        run = None
        if self.skipped_count > 0:
            run = SkipRun(
                period=self.period,
                skipped_count=self.skipped_count,
                start_time=self.start_time,
                end_time=end_time,
            )
        self.active = False
        self.skipped_count = 0
        return run

    def reset(self):
        self.active = False
        self.period = 0
        self.skipped_count = 0
        self.start_time = None
        self.end_time = None
