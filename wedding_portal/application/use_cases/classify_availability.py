from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from wedding_portal.application.ports.availability_calendar import AvailabilityCalendarPort
from wedding_portal.domain.entities.availability import AvailabilityStatus

MAX_RANGE_DAYS = 92


def classify(day: date | datetime, today: date, calendar: AvailabilityCalendarPort) -> AvailabilityStatus:
    """
    Decide whether a calendar day can be booked.

    Checks run in a fixed order: past, weekday, booked, hold. A past
    Thursday that is also booked therefore reports "past".
    """
    if isinstance(day, datetime):
        day = day.date()
    if day < today:
        return AvailabilityStatus.past
    if day.weekday() not in calendar.allowed_weekdays():
        return AvailabilityStatus.unavailable
    if calendar.is_booked(day):
        return AvailabilityStatus.booked
    if calendar.is_on_hold(day):
        return AvailabilityStatus.hold
    return AvailabilityStatus.available


class ClassifyAvailabilityUseCase:
    def __init__(self, calendar: AvailabilityCalendarPort, timezone: ZoneInfo) -> None:
        self._calendar = calendar
        self._timezone = timezone
        self._logger = logging.getLogger(__name__)

    def today(self) -> date:
        return datetime.now(self._timezone).date()

    def classify(self, day: date | datetime, today: date | None = None) -> AvailabilityStatus:
        if isinstance(day, datetime) and day.tzinfo is not None:
            day = day.astimezone(self._timezone)
        return classify(day, today or self.today(), self._calendar)

    def is_available(self, day: date | datetime, today: date | None = None) -> bool:
        return self.classify(day, today) == AvailabilityStatus.available

    def month(self, start: date, end: date, today: date | None = None) -> list[tuple[date, AvailabilityStatus]]:
        """Per-day statuses for start..end inclusive, used to disable calendar days."""
        if end < start:
            raise ValueError("end must not be before start")
        if (end - start).days + 1 > MAX_RANGE_DAYS:
            raise ValueError(f"Range is limited to {MAX_RANGE_DAYS} days")

        reference = today or self.today()
        days: list[tuple[date, AvailabilityStatus]] = []
        current = start
        while current <= end:
            days.append((current, classify(current, reference, self._calendar)))
            current += timedelta(days=1)
        return days
