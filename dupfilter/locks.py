"""Lock policies: a real mutex for shared use, a no-op one for single threads."""

import threading


class NullLock:
    """Drop-in for threading.Lock that never blocks."""

    def acquire(self, blocking: bool = True, timeout: float = -1) -> bool:
        return True

    def release(self):
        pass

    def locked(self) -> bool:
        return False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


def make_lock(thread_safe: bool):
    """Return threading.Lock() when thread_safe, else a NullLock."""
    return threading.Lock() if thread_safe else NullLock()
