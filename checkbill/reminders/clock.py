"""
Clock sources for the scheduler.

Times are naive wall-clock datetimes in the configured timezone, the same
representation used for ``Reminder.next_run``.
"""
import threading
from datetime import datetime, timedelta
from typing import Optional, Protocol

try:
    from zoneinfo import ZoneInfo
except ImportError:  # pragma: no cover
    ZoneInfo = None  # type: ignore


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Current time in ``tz_name`` with tzinfo stripped."""

    def __init__(self, tz_name: Optional[str] = None):
        self._tz = ZoneInfo(tz_name) if tz_name and ZoneInfo else None

    def now(self) -> datetime:
        if self._tz is None:
            return datetime.now()
        return datetime.now(self._tz).replace(tzinfo=None)


class ManualClock:
    """Clock that only moves when told to; used to drive the scheduler in tests."""

    def __init__(self, start: datetime):
        self._lock = threading.Lock()
        self._now = start

    def now(self) -> datetime:
        with self._lock:
            return self._now

    def set(self, value: datetime) -> None:
        with self._lock:
            self._now = value

    def advance(self, delta: timedelta) -> datetime:
        if delta <= timedelta(0):
            raise ValueError("delta must be positive")
        with self._lock:
            self._now = self._now + delta
            return self._now
