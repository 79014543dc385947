from __future__ import annotations

from datetime import date
from zoneinfo import ZoneInfo

import pytest

from wedding_portal.application.use_cases.admin_console import AdminConsoleUseCase
from wedding_portal.application.use_cases.booking_wizard import BookingWizardUseCase
from wedding_portal.application.use_cases.classify_availability import ClassifyAvailabilityUseCase
from wedding_portal.application.use_cases.compute_estimate import ComputeEstimateUseCase
from wedding_portal.infrastructure.calendar.static_calendar import StaticAvailabilityCalendar
from wedding_portal.infrastructure.catalog.pricing_data import build_catalog
from wedding_portal.infrastructure.email.mock_email import MockEmail
from wedding_portal.infrastructure.honeybook.mock_honeybook import MockHoneyBook
from wedding_portal.infrastructure.square.mock_square import MockSquare
from wedding_portal.infrastructure.store.memory_store import MemoryBookingStore

TODAY = date(2024, 11, 1)  # a Friday
BOOKED = ["2024-11-09", "2024-11-23", "2024-12-07", "2025-01-18"]
HELD = ["2024-11-16", "2024-12-14", "2025-02-08"]


class FixedTodayAvailability(ClassifyAvailabilityUseCase):
    def __init__(self, calendar, today: date = TODAY) -> None:
        super().__init__(calendar=calendar, timezone=ZoneInfo("America/Chicago"))
        self._fixed_today = today

    def today(self) -> date:
        return self._fixed_today


class FakeClock:
    def __init__(self, start: float = 1_730_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        self.now += 1.0
        return self.now


@pytest.fixture
def catalog():
    return build_catalog()


@pytest.fixture
def calendar():
    return StaticAvailabilityCalendar(allowed_weekdays=[3, 4, 5], booked_dates=BOOKED, hold_dates=HELD)


@pytest.fixture
def availability(calendar):
    return FixedTodayAvailability(calendar)


@pytest.fixture
def store():
    return MemoryBookingStore()


@pytest.fixture
def notifier():
    return MockEmail()


@pytest.fixture
def wizard(store, catalog, availability):
    return BookingWizardUseCase(
        store=store,
        estimator=ComputeEstimateUseCase(catalog),
        availability=availability,
        crm=MockHoneyBook(),
        payments=MockSquare(),
        clock=FakeClock(),
    )


@pytest.fixture
def admin(store, notifier, catalog):
    return AdminConsoleUseCase(store=store, notifier=notifier, catalog=catalog, clock=FakeClock(1_740_000_000.0))
