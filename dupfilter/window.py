"""Bounded history of the most recent records, newest at the back."""

from collections import deque

from dupfilter.record import LogRecord


class Window:
    """Pairs of (payload text, record) holding at most 2 * max_period entries.

    Eviction is explicit: callers append first and then call
    evict_if_over_capacity(), so the buffer may briefly hold one extra entry.
    """

    def __init__(self, max_period: int):
        self._capacity = 2 * max_period
        self._texts: deque[str] = deque()
        self._records: deque[LogRecord] = deque()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._texts)

    def append(self, record: LogRecord):
        """Push a record and its payload text to the back."""
        self._texts.append(record.payload)
        self._records.append(record)

    def evict_if_over_capacity(self):
        """Drop the oldest entries until the window fits its capacity."""
        while len(self._texts) > self._capacity:
            self._texts.popleft()
            self._records.popleft()

    def at(self, offset: int) -> LogRecord:
        """Return the record *offset* positions back from the newest (0)."""
        return self._records[self._index(offset)]

    def text_at(self, offset: int) -> str:
        """Return the payload text *offset* positions back from the newest (0)."""
        return self._texts[self._index(offset)]

    def texts(self) -> list[str]:
        """Snapshot of the payload texts, oldest first."""
        return list(self._texts)

    def clear(self):
        self._texts.clear()
        self._records.clear()

    def _index(self, offset: int) -> int:
        if offset < 0 or offset >= len(self._texts):
            raise IndexError(f"window offset {offset} out of range (size {len(self._texts)})")
        return len(self._texts) - 1 - offset
