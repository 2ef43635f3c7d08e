from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol


class RateLimitStore(Protocol):
    """
    Fixed-window attempt counter keyed by client.

    ``hit`` MUST be atomic per key: concurrent callers never observe the
    same count twice.
    """

    def hit(self, key: str, *, window: timedelta, now: datetime) -> int:
        """Record one attempt and return the count inside the current window."""
        ...

    def reset(self, key: str) -> None: ...


@dataclass(slots=True)
class _Window:
    count: int
    started_at: datetime


class InMemoryRateLimitStore(RateLimitStore):
    """
    Process-local store guarded by a lock.

    A window restarts when ``now - started_at > window`` (strictly greater).
    Entries whose window has elapsed are swept every ``sweep_every`` hits so
    the map does not grow without bound.
    """

    def __init__(self, *, sweep_every: int = 256) -> None:
        self._lock = threading.Lock()
        self._windows: dict[str, _Window] = {}
        self._sweep_every = max(1, sweep_every)
        self._hits = 0

    def hit(self, key: str, *, window: timedelta, now: datetime) -> int:
        with self._lock:
            self._hits += 1
            if self._hits % self._sweep_every == 0:
                self._sweep(window=window, now=now)

            entry = self._windows.get(key)
            if entry is None or now - entry.started_at > window:
                self._windows[key] = _Window(count=1, started_at=now)
                return 1
            entry.count += 1
            return entry.count

    def reset(self, key: str) -> None:
        with self._lock:
            self._windows.pop(key, None)

    def _sweep(self, *, window: timedelta, now: datetime) -> None:
        expired = [k for k, w in self._windows.items() if now - w.started_at > window]
        for k in expired:
            del self._windows[k]

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)
