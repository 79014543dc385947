from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date


class AvailabilityCalendarPort(ABC):
    @abstractmethod
    def allowed_weekdays(self) -> frozenset[int]:
        """Weekdays open for events (date.weekday(): Monday=0 .. Sunday=6)."""
        raise NotImplementedError

    @abstractmethod
    def is_booked(self, day: date) -> bool:
        raise NotImplementedError

    @abstractmethod
    def is_on_hold(self, day: date) -> bool:
        """True when the date is tentatively reserved but not confirmed."""
        raise NotImplementedError
