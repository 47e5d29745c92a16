"""
Horloge injectable / Injectable clock.

Le moteur de facturation ne lit jamais date.today() directement : le "jour courant"
(plafond "pas de projection future") est fourni par une Clock.
The billing engine never reads date.today() directly: the "current day"
(no-future-projection ceiling) comes from a Clock.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from zoneinfo import ZoneInfo


class Clock(ABC):
    """Interface horloge / Clock interface."""

    @abstractmethod
    def today(self) -> date:
        """Jour calendaire courant / Current calendar day."""
        ...


class SystemClock(Clock):
    """Horloge systeme dans un fuseau donne / System clock in a given timezone."""

    def __init__(self, tz_name: str = "UTC"):
        self._tz = ZoneInfo(tz_name)

    def today(self) -> date:
        return datetime.now(self._tz).date()


class FixedClock(Clock):
    """Horloge figee pour les tests / Frozen clock for tests."""

    def __init__(self, fixed_day: date):
        self._day = fixed_day

    def today(self) -> date:
        return self._day

    def set_day(self, day: date) -> None:
        self._day = day
