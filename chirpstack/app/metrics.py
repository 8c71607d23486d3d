"""
metrics.py — process-wide file-server hit counter.

The counter is the only shared mutable state in the process. Flask may serve
requests from several threads, so every operation takes the lock.
"""

from __future__ import annotations

import threading


class HitCounter:

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def __repr__(self) -> str:  # pragma: no cover
        return f"<HitCounter value={self.value}>"
