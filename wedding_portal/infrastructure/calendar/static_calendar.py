from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from wedding_portal.application.ports.availability_calendar import AvailabilityCalendarPort


class StaticAvailabilityCalendar(AvailabilityCalendarPort):
    """Availability backed by fixed weekday and ISO date sets from configuration."""

    def __init__(
        self,
        allowed_weekdays: Iterable[int],
        booked_dates: Iterable[str | date] = (),
        hold_dates: Iterable[str | date] = (),
    ) -> None:
        self._logger = logging.getLogger(__name__)
        self._allowed_weekdays = frozenset(allowed_weekdays)
        self._booked = self._parse_dates(booked_dates)
        self._held = self._parse_dates(hold_dates)

    def allowed_weekdays(self) -> frozenset[int]:
        return self._allowed_weekdays

    def is_booked(self, day: date) -> bool:
        return day.isoformat() in self._booked

    def is_on_hold(self, day: date) -> bool:
        return day.isoformat() in self._held

    def _parse_dates(self, values: Iterable[str | date]) -> frozenset[str]:
        parsed: set[str] = set()
        for value in values:
            if isinstance(value, date):
                parsed.add(value.isoformat())
                continue
            try:
                parsed.add(date.fromisoformat(value.strip()).isoformat())
            except (ValueError, AttributeError):
                self._logger.warning("Ignoring invalid calendar date", extra={"value": value})
        return frozenset(parsed)
