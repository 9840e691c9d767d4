"""
Injectable sources of the current instant.

Production wiring uses :class:`SystemClock`; tests pin time with
:class:`FixedClock`. :class:`CachedClock` memoizes another clock so that
requests signed within the same tick share one timestamp.
"""

from __future__ import annotations

import threading
import time
from datetime import datetime, timezone
from typing import Callable, Protocol


def as_utc(instant: datetime) -> datetime:
    """Return *instant* as an aware UTC datetime (naive values are UTC)."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


class Clock(Protocol):
    """Anything with a ``now()`` returning the current UTC instant."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock frozen at a single instant."""

    def __init__(self, instant: datetime) -> None:
        self._instant = as_utc(instant)

    def now(self) -> datetime:
        return self._instant

    def __repr__(self) -> str:
        return f"FixedClock({self._instant.isoformat()})"


class CachedClock:
    """Thread-safe clock that refreshes from *source* at most once per TTL.

    Readers may call :meth:`now` concurrently; only the refresh is
    serialised.
    """

    def __init__(
        self,
        source: Clock | None = None,
        ttl_seconds: float = 1.0,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._source = source or SystemClock()
        self._ttl = ttl_seconds
        self._monotonic = monotonic
        self._lock = threading.Lock()
        self._cached: datetime | None = None
        self._refreshed_at = 0.0

    def now(self) -> datetime:
        with self._lock:
            tick = self._monotonic()
            if self._cached is None or tick - self._refreshed_at >= self._ttl:
                self._cached = as_utc(self._source.now())
                self._refreshed_at = tick
            return self._cached

    def clear(self) -> None:
        """Drop the cached instant so the next read hits the source."""
        with self._lock:
            self._cached = None
