"""Mini README: Time sources used by the ledger engine.

Enrollment, meal recording and alert computation all depend on "now". The
engine receives one of these clocks instead of calling ``datetime.now``
directly so that tests can pin time.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Anything returning the current timezone-aware UTC instant."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock pinned to an instant; ``advance`` moves it forward."""

    def __init__(self, instant: datetime) -> None:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def advance(self, *, days: float = 0, hours: float = 0) -> datetime:
        self._instant = self._instant + timedelta(days=days, hours=hours)
        return self._instant
