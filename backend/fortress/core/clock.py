from datetime import date
from typing import Protocol


class Clock(Protocol):
    def today(self) -> date: ...


class SystemClock:
    def today(self) -> date:
        return date.today()


class FixedClock:
    """Always reports the same day. Used by tests and what-if queries."""

    def __init__(self, day: date):
        self.day = day

    def today(self) -> date:
        return self.day
