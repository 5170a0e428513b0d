"""Operational counters for a filter instance."""

import time


class FilterMetrics:
    """Plain counters; the owning filter serializes access with its lock policy."""

    def __init__(self):
        self.reset()

    def reset(self):
        self.received = 0
        self.forwarded = 0
        self.skipped = 0
        self.summaries = 0
        self.runs_detected = 0
        self._start_time = time.monotonic()

    def snapshot(self) -> dict:
        """Return a point-in-time snapshot of all counters."""
        elapsed = time.monotonic() - self._start_time
        return {
            "received": self.received,
            "forwarded": self.forwarded,
            "skipped": self.skipped,
            "summaries": self.summaries,
            "runs_detected": self.runs_detected,
            "elapsed_seconds": round(elapsed, 2),
            "skip_ratio": round(self.skipped / self.received, 4) if self.received else 0.0,
        }
