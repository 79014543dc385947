from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import date
from typing import Any

from wedding_portal.application.exceptions import (
    ActionInProgressError,
    BookingNotFoundError,
    DateUnavailableError,
    WizardStepError,
)
from wedding_portal.application.ports.booking_store import BookingStorePort
from wedding_portal.application.ports.crm_sync import CrmSyncPort, CrmSyncResult
from wedding_portal.application.ports.payment_gateway import DepositIntent, PaymentGatewayPort
from wedding_portal.application.use_cases.classify_availability import ClassifyAvailabilityUseCase
from wedding_portal.application.use_cases.compute_estimate import ComputeEstimateUseCase
from wedding_portal.domain.entities.availability import AvailabilityStatus
from wedding_portal.domain.entities.booking_request import (
    BookingRequest,
    ClientContact,
    PaymentStatus,
    PlanType,
    RequestMessage,
    RequestStatus,
    WizardStep,
)
from wedding_portal.domain.entities.estimate import PaymentMilestone
from wedding_portal.domain.entities.selections import CustomSelections

PAYMENT_METHODS = {"ach", "card"}

WELCOME_MESSAGE = (
    "We're so glad you're here. Once you enter your details, our team will confirm "
    "availability, push everything to HoneyBook, and keep you in the loop inside this "
    "shared dashboard."
)
AUTO_ACK_MESSAGE = (
    "Thanks! A coordinator will reply shortly and we'll log this thread inside HoneyBook as well."
)


def new_message_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4()}"


class BookingWizardUseCase:
    """
    Drives one booking request through welcome -> calendar -> contact ->
    plan -> custom -> review, then hands it to the admin console on submit.
    """

    def __init__(
        self,
        store: BookingStorePort,
        estimator: ComputeEstimateUseCase,
        availability: ClassifyAvailabilityUseCase,
        crm: CrmSyncPort,
        payments: PaymentGatewayPort,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._estimator = estimator
        self._availability = availability
        self._crm = crm
        self._payments = payments
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def start(self) -> BookingRequest:
        now = self._clock()
        booking = BookingRequest(
            id=f"REQ-{uuid.uuid4().hex[:8].upper()}",
            created_at=now,
            updated_at=now,
            step=WizardStep.calendar,
            messages=(
                RequestMessage(id="welcome-note", sender="system", body=WELCOME_MESSAGE, timestamp=now),
            ),
        )
        self._store.save(booking)
        self._logger.info("Booking started", extra={"booking_id": booking.id})
        return booking

    def get(self, booking_id: str) -> BookingRequest:
        booking = self._store.get(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    def select_date(self, booking_id: str, day: date, today: date | None = None) -> BookingRequest:
        _require_editable(self.get(booking_id))
        status = self._availability.classify(day, today)
        if status != AvailabilityStatus.available:
            self._logger.info(
                "Date rejected",
                extra={"booking_id": booking_id, "event_date": day.isoformat(), "status": status.value},
            )
            raise DateUnavailableError(day, status)

        now = self._clock()

        def change(booking: BookingRequest) -> BookingRequest:
            _require_editable(booking)
            return replace(
                booking,
                event_date=day,
                plan_type=None,
                estimate=None,
                synced_to_honeybook=False,
                step=WizardStep.contact,
                updated_at=now,
            )

        return self._store.update(booking_id, change)

    def submit_contact(self, booking_id: str, contact: ClientContact) -> BookingRequest:
        now = self._clock()

        def change(booking: BookingRequest) -> BookingRequest:
            _require_editable(booking)
            if booking.event_date is None:
                raise WizardStepError("Pick an event date before entering contact details")
            return replace(booking, client=contact, step=WizardStep.plan, updated_at=now)

        return self._store.update(booking_id, change)

    def open_custom(self, booking_id: str) -> BookingRequest:
        now = self._clock()

        def change(booking: BookingRequest) -> BookingRequest:
            _require_editable(booking)
            _require_contact(booking)
            return replace(booking, step=WizardStep.custom, updated_at=now)

        return self._store.update(booking_id, change)

    def choose_streamlined(self, booking_id: str) -> BookingRequest:
        estimate = self._estimator.streamlined()
        now = self._clock()

        def change(booking: BookingRequest) -> BookingRequest:
            _require_editable(booking)
            _require_contact(booking)
            return replace(
                booking,
                plan_type=PlanType.streamlined,
                selections=None,
                estimate=estimate,
                step=WizardStep.review,
                updated_at=now,
            )

        return self._store.update(booking_id, change)

    def submit_custom(
        self,
        booking_id: str,
        selections: CustomSelections | Mapping[str, Any],
    ) -> BookingRequest:
        booking = self.get(booking_id)
        _require_editable(booking)
        _require_contact(booking)
        normalized, estimate = self._estimator.execute(selections)
        now = self._clock()

        def change(current: BookingRequest) -> BookingRequest:
            _require_editable(current)
            _require_contact(current)
            return replace(
                current,
                plan_type=PlanType.custom,
                selections=normalized,
                estimate=estimate,
                step=WizardStep.review,
                updated_at=now,
            )

        updated = self._store.update(booking_id, change)
        self._logger.info(
            "Custom estimate computed",
            extra={"booking_id": booking_id, "total": estimate.total, "deposit": estimate.deposit},
        )
        return updated

    def submit(self, booking_id: str) -> BookingRequest:
        booking = self.get(booking_id)
        _require_estimate(booking)
        if booking.status != RequestStatus.draft:
            return booking

        now = self._clock()

        def change(current: BookingRequest) -> BookingRequest:
            _require_estimate(current)
            if current.status != RequestStatus.draft:
                return current
            return replace(
                current,
                status=RequestStatus.new,
                submitted_at=now,
                updated_at=now,
                messages=current.messages
                + (
                    RequestMessage(
                        id=new_message_id("system"),
                        sender="system",
                        body="Estimate submitted for coordinator review.",
                        timestamp=now,
                    ),
                ),
            )

        updated = self._store.update(booking_id, change)
        self._logger.info("Booking submitted", extra={"booking_id": booking_id})
        return updated

    def sync_honeybook(self, booking_id: str) -> tuple[BookingRequest, CrmSyncResult]:
        _require_estimate(self.get(booking_id))
        claimed = self._store.claim_action(booking_id, "honeybook_sync")
        try:
            result = self._crm.sync_booking(claimed)
        except Exception:
            self._store.release_action(booking_id)
            raise

        # Only the sync fields change; writes made during the call are kept.
        now = self._clock()
        updated = self._store.update(
            booking_id,
            lambda current: replace(
                current,
                synced_to_honeybook=current.synced_to_honeybook or result.success,
                pending_action=None,
                updated_at=now,
            ),
        )
        self._logger.info(
            "HoneyBook sync finished",
            extra={"booking_id": booking_id, "status": "ok" if result.success else "failed"},
        )
        return updated, result

    def start_deposit(self, booking_id: str, method: str) -> tuple[BookingRequest, DepositIntent | None]:
        """
        Open a deposit payment for the current estimate.
        Returns (booking, None) when a deposit is already processing or paid.
        """
        if method not in PAYMENT_METHODS:
            raise ValueError(f"Unsupported payment method: {method}")

        booking = self.get(booking_id)
        _require_estimate(booking)
        if booking.payment_status != PaymentStatus.unpaid:
            return booking, None

        claimed = self._store.claim_action(booking_id, "deposit")
        try:
            intent = self._payments.create_deposit_intent(
                amount=claimed.estimate.deposit,
                method=method,
                booking_reference=_booking_reference(claimed),
            )
        except Exception:
            self._store.release_action(booking_id)
            raise

        now = self._clock()
        updated = self._store.update(
            booking_id,
            lambda current: replace(
                current,
                payment_status=PaymentStatus.deposit_processing,
                payment_reference=intent.client_secret,
                pending_action=None,
                updated_at=now,
            ),
        )
        self._logger.info(
            "Deposit intent created",
            extra={"booking_id": booking_id, "amount": claimed.estimate.deposit, "method": method},
        )
        return updated, intent

    def send_message(self, booking_id: str, text: str) -> BookingRequest:
        trimmed = text.strip()
        if not trimmed:
            raise ValueError("Message must not be empty")

        now = self._clock()
        added = (
            RequestMessage(id=new_message_id("client"), sender="guest", body=trimmed, timestamp=now),
            RequestMessage(id=new_message_id("auto"), sender="system", body=AUTO_ACK_MESSAGE, timestamp=now),
        )
        return self._store.update(
            booking_id,
            lambda booking: replace(booking, updated_at=now, messages=booking.messages + added),
        )

    def payment_schedule(self, booking_id: str) -> list[PaymentMilestone]:
        booking = self.get(booking_id)
        _require_estimate(booking)
        return self._estimator.schedule(booking.estimate, booking.payment_status)


def _require_editable(booking: BookingRequest) -> None:
    """Date, contact and plan are frozen once submitted, paying or mid-integration."""
    if booking.status != RequestStatus.draft:
        raise WizardStepError("This request was already submitted; message the team to change it")
    if booking.payment_status != PaymentStatus.unpaid:
        raise WizardStepError("A deposit is already underway for this estimate")
    if booking.pending_action is not None:
        raise ActionInProgressError(f"{booking.pending_action} already in progress for {booking.id}")


def _require_contact(booking: BookingRequest) -> None:
    if booking.event_date is None:
        raise WizardStepError("Pick an event date first")
    if booking.client is None:
        raise WizardStepError("Enter contact details before choosing a plan")


def _require_estimate(booking: BookingRequest) -> None:
    _require_contact(booking)
    if booking.estimate is None or booking.plan_type is None:
        raise WizardStepError("Choose a plan before continuing")


def _booking_reference(booking: BookingRequest) -> dict[str, Any]:
    client = booking.client
    return {
        "booking_id": booking.id,
        "date": booking.event_date.isoformat() if booking.event_date else None,
        "plan_type": booking.plan_type.value if booking.plan_type else None,
        "client": {
            "primary_name": client.primary_name,
            "partner_name": client.partner_name,
            "email": client.email,
            "phone": client.phone,
            "pronouns": client.pronouns,
        }
        if client
        else None,
    }
