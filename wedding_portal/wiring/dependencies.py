from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from wedding_portal.application.ports.availability_calendar import AvailabilityCalendarPort
from wedding_portal.application.ports.booking_store import BookingStorePort
from wedding_portal.application.ports.crm_sync import CrmSyncPort
from wedding_portal.application.ports.notifications import NotificationPort
from wedding_portal.application.ports.payment_gateway import PaymentGatewayPort
from wedding_portal.application.use_cases.admin_console import AdminConsoleUseCase
from wedding_portal.application.use_cases.booking_wizard import BookingWizardUseCase
from wedding_portal.application.use_cases.classify_availability import ClassifyAvailabilityUseCase
from wedding_portal.application.use_cases.compute_estimate import ComputeEstimateUseCase
from wedding_portal.core.config import settings
from wedding_portal.domain.entities.pricing import PricingCatalog
from wedding_portal.infrastructure.calendar.static_calendar import StaticAvailabilityCalendar
from wedding_portal.infrastructure.catalog.pricing_data import build_catalog
from wedding_portal.infrastructure.email.email_client import EmailClient
from wedding_portal.infrastructure.email.mock_email import MockEmail
from wedding_portal.infrastructure.honeybook.honeybook_client import HoneyBookClient
from wedding_portal.infrastructure.honeybook.mock_honeybook import MockHoneyBook
from wedding_portal.infrastructure.square.mock_square import MockSquare
from wedding_portal.infrastructure.square.square_client import SquareClient
from wedding_portal.infrastructure.store.json_store import JsonBookingStore
from wedding_portal.infrastructure.store.memory_store import MemoryBookingStore


_booking_store: MemoryBookingStore | JsonBookingStore | None = None

logger = logging.getLogger(__name__)


def _is_local() -> bool:
    return settings.ENV.lower() in {"dev", "local"}


@lru_cache
def get_catalog() -> PricingCatalog:
    return build_catalog()


def get_booking_store() -> BookingStorePort:
    global _booking_store
    if _booking_store is None:
        if settings.BOOKING_STORE.lower() == "memory":
            logger.warning("Using MemoryBookingStore, booking requests are lost on restart")
            _booking_store = MemoryBookingStore()
        else:
            _booking_store = JsonBookingStore(data_dir=settings.BOOKING_DATA_DIR)
    return _booking_store


@lru_cache
def get_calendar() -> AvailabilityCalendarPort:
    return StaticAvailabilityCalendar(
        allowed_weekdays=settings.ALLOWED_EVENT_WEEKDAYS,
        booked_dates=settings.BOOKED_DATES,
        hold_dates=settings.HOLD_DATES,
    )


def get_availability_use_case() -> ClassifyAvailabilityUseCase:
    return ClassifyAvailabilityUseCase(
        calendar=get_calendar(),
        timezone=ZoneInfo(settings.BUSINESS_TIMEZONE),
    )


def get_estimate_use_case() -> ComputeEstimateUseCase:
    return ComputeEstimateUseCase(catalog=get_catalog())


@lru_cache
def get_crm() -> CrmSyncPort:
    if not settings.HONEYBOOK_API_KEY:
        if _is_local():
            logger.info("Using MockHoneyBook (key missing, ENV=dev/local)")
            return MockHoneyBook()
        raise ValueError("HONEYBOOK_API_KEY is required to sync bookings.")
    return HoneyBookClient(api_key=settings.HONEYBOOK_API_KEY, base_url=settings.HONEYBOOK_BASE_URL)


@lru_cache
def get_payment_gateway() -> PaymentGatewayPort:
    if not settings.SQUARE_ACCESS_TOKEN:
        if _is_local():
            logger.info("Using MockSquare (token missing, ENV=dev/local)")
            return MockSquare()
        raise ValueError("SQUARE_ACCESS_TOKEN is required to take deposits.")
    return SquareClient(
        access_token=settings.SQUARE_ACCESS_TOKEN,
        location_id=settings.SQUARE_LOCATION_ID or "",
        base_url=settings.SQUARE_BASE_URL,
    )


@lru_cache
def get_notifier() -> NotificationPort:
    if not settings.EMAIL_API_KEY:
        if _is_local():
            logger.info("Using MockEmail (key missing, ENV=dev/local)")
            return MockEmail()
        raise ValueError("EMAIL_API_KEY is required to email clients.")
    return EmailClient(
        api_key=settings.EMAIL_API_KEY,
        send_endpoint=settings.EMAIL_SEND_ENDPOINT,
        from_address=settings.EMAIL_FROM_ADDRESS,
    )


def get_booking_wizard() -> BookingWizardUseCase:
    return BookingWizardUseCase(
        store=get_booking_store(),
        estimator=get_estimate_use_case(),
        availability=get_availability_use_case(),
        crm=get_crm(),
        payments=get_payment_gateway(),
    )


def get_admin_console() -> AdminConsoleUseCase:
    return AdminConsoleUseCase(
        store=get_booking_store(),
        notifier=get_notifier(),
        catalog=get_catalog(),
        business_name=settings.BUSINESS_NAME,
        default_sender=settings.ADMIN_SENDER_NAME,
    )
