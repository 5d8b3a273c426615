"""Clock abstraction so streak and report logic can be driven by tests."""

from datetime import date, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...

    def today(self) -> date: ...


class SystemClock:
    """Local wall-clock time."""

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock pinned to a given instant, advanced manually.

    Args:
        current: Starting instant.
    """

    def __init__(self, current: datetime):
        self.current = current

    def now(self) -> datetime:
        return self.current

    def today(self) -> date:
        return self.current.date()

    def advance(self, days: int = 0, hours: int = 0, minutes: int = 0) -> None:
        self.current += timedelta(days=days, hours=hours, minutes=minutes)
