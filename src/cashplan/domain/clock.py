"""Injectable clock so that "today" is a session decision, not a global."""

from abc import ABC, abstractmethod
from datetime import date, datetime, time


class Clock(ABC):
    """Abstract clock interface.

    Services that need the current date receive a Clock through the session
    and never call ``date.today()`` directly.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Get the current wall-clock time."""
        ...

    def today(self) -> date:
        """Get the current calendar day."""
        return self.now().date()


class SystemClock(Clock):
    """Clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """Clock pinned to a given day, used by tests and the ``--today`` option."""

    def __init__(self, today: date, at: time = time(9, 0)):
        self._now = datetime.combine(today, at)

    def now(self) -> datetime:
        return self._now

    def set_today(self, today: date) -> None:
        """Move the clock to another day, keeping the time of day."""
        self._now = datetime.combine(today, self._now.time())
