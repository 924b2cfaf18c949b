"""
Time provider abstraction for deterministic testing

Every "now" in the system (resource last_updated, incident reported_at,
allocation timestamps) comes from an injected provider, so recommendations
and commits can be replayed with identical timestamps.
"""

from datetime import datetime, timedelta, timezone
from typing import Protocol


class TimeProvider(Protocol):
    """Protocol for time providers - allows deterministic testing"""

    def now(self) -> datetime:
        """Return current UTC datetime"""
        ...


class RealTimeProvider:
    """Production time provider using system clock"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FrozenTimeProvider:
    """
    Controllable time provider for deterministic tests

    Time stands still until a test moves it explicitly.
    """

    def __init__(self, initial_time: datetime | None = None) -> None:
        """
        Args:
            initial_time: Starting time (defaults to Unix epoch)
        """
        self._current_time = initial_time or datetime(1970, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._current_time

    def set_time(self, dt: datetime) -> None:
        """Set current time to specific value"""
        self._current_time = dt

    def advance_minutes(self, minutes: int) -> None:
        """Advance time by specified minutes"""
        self._current_time += timedelta(minutes=minutes)

    def advance_hours(self, hours: int) -> None:
        """Advance time by specified hours"""
        self._current_time += timedelta(hours=hours)
