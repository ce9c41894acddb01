"""Clock abstraction for past-date and expiry checks"""
from abc import ABC, abstractmethod
from datetime import date, datetime, timezone


class Clock(ABC):
    """Supplies the current time"""

    @abstractmethod
    def now(self) -> datetime:
        """Current UTC datetime"""
        pass

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    """Wall clock in UTC"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Clock pinned to a given instant"""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self._instant = instant

    @staticmethod
    def on(day: date) -> "FixedClock":
        return FixedClock(datetime(day.year, day.month, day.day, 12, 0, tzinfo=timezone.utc))

    def now(self) -> datetime:
        return self._instant

    def advance_to(self, instant: datetime) -> None:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self._instant = instant


system_clock = SystemClock()
