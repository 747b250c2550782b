"""Thread-safe per-identifier run counters."""

from __future__ import annotations

import threading
from collections import defaultdict


class RunCounters:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: dict[str, int] = defaultdict(int)

    def increment(self, key: str) -> int:
        """Bump the counter for ``key`` and return its new value."""
        with self._lock:
            self._counts[key] += 1
            return self._counts[key]

    def snapshot(self) -> dict[str, int]:
        """Return a point-in-time copy, sorted by key."""
        with self._lock:
            return dict(sorted(self._counts.items()))

    def total(self) -> int:
        with self._lock:
            return sum(self._counts.values())
