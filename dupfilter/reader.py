"""Generator-based line sources: files, globs, stdin and tail -f."""

import glob
import os
import sys
import time
from typing import Iterator

STDIN = "-"


def read_lines(path: str) -> Iterator[tuple[str, str, int]]:
    """Yield (line, path, line_no) for each line of *path*; '-' reads stdin."""
    if path == STDIN:
        for line_no, line in enumerate(sys.stdin, start=1):
            yield line, "<stdin>", line_no
        return

    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line_no, line in enumerate(f, start=1):
            yield line, path, line_no


def read_multiple(paths: list[str]) -> Iterator[tuple[str, str, int]]:
    """Yield lines from each path in turn."""
    for path in paths:
        yield from read_lines(path)


def expand_paths(raw_paths: list[str]) -> list[str]:
    """Expand globs, drop duplicates, and check that plain paths exist.

    Raises FileNotFoundError for a missing plain path or when nothing matches.
    """
    if not raw_paths:
        return [STDIN]

    expanded: list[str] = []
    for raw in raw_paths:
        if raw == STDIN:
            candidates = [STDIN]
        elif any(c in raw for c in "*?["):
            candidates = sorted(glob.glob(raw))
        elif os.path.isfile(raw):
            candidates = [raw]
        else:
            raise FileNotFoundError(f"File not found: {raw}")

        expanded.extend(c for c in candidates if c not in expanded)

    if not expanded:
        raise FileNotFoundError("No log files found matching the given paths")
    return expanded


def tail_file(path: str, poll_interval: float = 0.1) -> Iterator[tuple[str, str, int]]:
    """Follow *path* from its current end, yielding complete new lines forever."""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        f.seek(0, os.SEEK_END)
        pending = ""
        line_no = 0
        while True:
            chunk = f.read()
            if not chunk:
                time.sleep(poll_interval)
                continue
            pending += chunk
            *lines, pending = pending.split("\n")
            for line in lines:
                line_no += 1
                yield line + "\n", path, line_no
