"""
Clock abstraction so "now" can be injected.

Every operation that reads the current time accepts an optional ``clock``.
Passing ``None`` uses the system clock.
"""

from datetime import datetime, timedelta, timezone


class SystemClock:
    """Reads the real wall clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Always returns the same instant. Used by tests and replays."""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def advance(self, seconds: float) -> None:
        """Move the clock forward by the given number of seconds."""
        self.instant = self.instant + timedelta(seconds=seconds)


SYSTEM_CLOCK = SystemClock()


def current_instant(clock=None) -> datetime:
    """Current aware UTC instant from ``clock`` (system clock if None)."""
    return (clock or SYSTEM_CLOCK).now()
