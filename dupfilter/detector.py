"""Period detection: finds the longest cycle repeated at the end of a window."""

from dupfilter.window import Window


def matches_period(window: Window, period: int) -> bool:
    """Return True if the newest *period* texts equal the *period* texts before them.

    Pairs are compared newest first so a mismatch near the end of the stream
    stops the scan early.
    """
    if period < 1 or 2 * period > len(window):
        return False
    for offset in range(period):
        if window.text_at(offset) != window.text_at(offset + period):
            return False
    return True


def find_period(window: Window, max_period: int) -> int | None:
    """Return the largest period <= max_period confirmed by the window, or None.

    Candidates are tried from max_period down to 1, so a short sub-cycle
    nested inside a longer repeating pattern never wins over the long one.
    """
    for period in range(max_period, 0, -1):
        if matches_period(window, period):
            return period
    return None
