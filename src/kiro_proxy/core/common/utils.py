from __future__ import annotations

import threading
import time


class MonotonicIdGenerator:
    """Produce identifiers from a nanosecond clock that never repeat.

    Two calls landing on the same clock tick (or a clock stepping backwards)
    still yield distinct, increasing values.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last = 0

    def next_value(self) -> int:
        with self._lock:
            value = max(time.time_ns(), self._last + 1)
            self._last = value
            return value

    def __call__(self, prefix: str = "") -> str:
        return f"{prefix}{self.next_value()}"


id_generator = MonotonicIdGenerator()


def generate_id(prefix: str = "") -> str:
    """Return a process-unique identifier such as ``chatcmpl-1719...``."""
    return id_generator(prefix)
