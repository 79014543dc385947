"""
Tests for the booking wizard flow: date -> contact -> plan -> review.
"""

from __future__ import annotations

from datetime import date

import pytest

from wedding_portal.application.exceptions import (
    ActionInProgressError,
    BookingNotFoundError,
    DateUnavailableError,
    IntegrationError,
    WizardStepError,
)
from wedding_portal.application.ports.crm_sync import CrmSyncPort
from wedding_portal.application.ports.payment_gateway import PaymentGatewayPort
from wedding_portal.application.use_cases.booking_wizard import BookingWizardUseCase
from wedding_portal.application.use_cases.compute_estimate import ComputeEstimateUseCase
from wedding_portal.domain.entities.availability import AvailabilityStatus
from wedding_portal.domain.entities.booking_request import (
    ClientContact,
    PaymentStatus,
    PlanType,
    RequestStatus,
    WizardStep,
)
from wedding_portal.infrastructure.honeybook.mock_honeybook import MockHoneyBook
from wedding_portal.infrastructure.square.mock_square import MockSquare

OPEN_FRIDAY = date(2025, 1, 17)
CONTACT = ClientContact(
    primary_name="Alex Rivera",
    partner_name="Jordan Lee",
    email="alex+jordan@example.com",
    phone="612-555-0199",
    pronouns="they/them",
)


class FailingCrm(CrmSyncPort):
    def __init__(self) -> None:
        self.calls = 0

    def sync_booking(self, booking):
        self.calls += 1
        raise IntegrationError("Unable to sync with HoneyBook")


class InterruptedCrm(CrmSyncPort):
    """Runs another write while the HoneyBook call is out."""

    def __init__(self) -> None:
        self.during_call = None

    def sync_booking(self, booking):
        self.during_call(booking)
        return MockHoneyBook().sync_booking(booking)


class InterruptedPayments(PaymentGatewayPort):
    def __init__(self) -> None:
        self.during_call = None

    def create_deposit_intent(self, amount, method, booking_reference):
        self.during_call(booking_reference)
        return MockSquare().create_deposit_intent(amount, method, booking_reference)


class CountingPayments(PaymentGatewayPort):
    def __init__(self) -> None:
        self.calls = []

    def create_deposit_intent(self, amount, method, booking_reference):
        self.calls.append((amount, method, booking_reference))
        return MockSquare().create_deposit_intent(amount, method, booking_reference)


def _ready_for_plan(wizard):
    booking = wizard.start()
    wizard.select_date(booking.id, OPEN_FRIDAY)
    wizard.submit_contact(booking.id, CONTACT)
    return booking.id


def test_start_creates_draft_at_calendar_step(wizard, store):
    booking = wizard.start()

    assert booking.step == WizardStep.calendar
    assert booking.status == RequestStatus.draft
    assert booking.messages[0].sender == "system"
    assert store.get(booking.id) == booking


def test_select_available_date_moves_to_contact(wizard):
    booking = wizard.start()
    updated = wizard.select_date(booking.id, OPEN_FRIDAY)

    assert updated.event_date == OPEN_FRIDAY
    assert updated.step == WizardStep.contact
    assert updated.plan_type is None


def test_select_unavailable_date_is_rejected(wizard):
    booking = wizard.start()

    with pytest.raises(DateUnavailableError) as exc_info:
        wizard.select_date(booking.id, date(2025, 1, 18))
    assert exc_info.value.status == AvailabilityStatus.booked

    with pytest.raises(DateUnavailableError) as exc_info:
        wizard.select_date(booking.id, date(2025, 1, 15))
    assert exc_info.value.status == AvailabilityStatus.unavailable

    assert wizard.get(booking.id).event_date is None


def test_contact_requires_date(wizard):
    booking = wizard.start()
    with pytest.raises(WizardStepError):
        wizard.submit_contact(booking.id, CONTACT)


def test_plan_requires_contact(wizard):
    booking = wizard.start()
    wizard.select_date(booking.id, OPEN_FRIDAY)
    with pytest.raises(WizardStepError):
        wizard.choose_streamlined(booking.id)


def test_unknown_booking(wizard):
    with pytest.raises(BookingNotFoundError):
        wizard.get("REQ-MISSING")


def test_streamlined_plan(wizard):
    booking_id = _ready_for_plan(wizard)
    booking = wizard.choose_streamlined(booking_id)

    assert booking.plan_type == PlanType.streamlined
    assert booking.step == WizardStep.review
    assert booking.estimate.total == 4000
    assert booking.estimate.deposit == 1000


def test_custom_plan_computes_estimate(wizard):
    booking_id = _ready_for_plan(wizard)
    wizard.open_custom(booking_id)
    booking = wizard.submit_custom(
        booking_id,
        {
            "guest_count": 32,
            "choices": {
                "food": "plated",
                "beverage": "cocktails",
                "cake": "need",
                "floral": "inHouse",
                "coordinator": "fullPlanning",
                "officiant": "notRequired",
            },
        },
    )

    assert booking.plan_type == PlanType.custom
    assert booking.selections.guest_count == 32
    assert booking.estimate.total == 9264
    assert booking.estimate.deposit == 2316


def test_reselecting_date_clears_plan(wizard):
    booking_id = _ready_for_plan(wizard)
    wizard.choose_streamlined(booking_id)

    booking = wizard.select_date(booking_id, date(2025, 1, 16))

    assert booking.plan_type is None
    assert booking.estimate is None
    assert booking.synced_to_honeybook is False
    assert booking.client == CONTACT


def test_submit_hands_request_to_admin(wizard):
    booking_id = _ready_for_plan(wizard)
    with pytest.raises(WizardStepError):
        wizard.submit(booking_id)

    wizard.choose_streamlined(booking_id)
    booking = wizard.submit(booking_id)

    assert booking.status == RequestStatus.new
    assert booking.submitted_at is not None
    assert wizard.submit(booking_id).submitted_at == booking.submitted_at


def test_honeybook_sync_sets_flag(wizard):
    booking_id = _ready_for_plan(wizard)
    wizard.choose_streamlined(booking_id)

    booking, result = wizard.sync_honeybook(booking_id)

    assert result.success is True
    assert booking.synced_to_honeybook is True
    assert booking.pending_action is None


def test_failed_sync_can_be_retried(store, catalog, availability):
    crm = FailingCrm()
    wizard = BookingWizardUseCase(
        store=store,
        estimator=ComputeEstimateUseCase(catalog),
        availability=availability,
        crm=crm,
        payments=MockSquare(),
    )
    booking_id = _ready_for_plan(wizard)
    wizard.choose_streamlined(booking_id)

    for _ in range(2):
        with pytest.raises(IntegrationError):
            wizard.sync_honeybook(booking_id)

    assert crm.calls == 2
    assert store.get(booking_id).pending_action is None
    assert store.get(booking_id).synced_to_honeybook is False


def test_second_action_while_pending_is_rejected(wizard, store):
    booking_id = _ready_for_plan(wizard)
    wizard.choose_streamlined(booking_id)
    store.claim_action(booking_id, "deposit")

    with pytest.raises(ActionInProgressError):
        wizard.sync_honeybook(booking_id)


def test_deposit_uses_estimate_deposit_once(store, catalog, availability):
    payments = CountingPayments()
    wizard = BookingWizardUseCase(
        store=store,
        estimator=ComputeEstimateUseCase(catalog),
        availability=availability,
        crm=MockHoneyBook(),
        payments=payments,
    )
    booking_id = _ready_for_plan(wizard)
    wizard.choose_streamlined(booking_id)

    booking, intent = wizard.start_deposit(booking_id, "ach")
    again, second_intent = wizard.start_deposit(booking_id, "card")

    assert intent.client_secret == "mock_square_ach_token"
    assert booking.payment_status == PaymentStatus.deposit_processing
    assert second_intent is None
    assert again.payment_status == PaymentStatus.deposit_processing
    assert len(payments.calls) == 1
    amount, method, reference = payments.calls[0]
    assert amount == 1000
    assert method == "ach"
    assert reference["date"] == "2025-01-17"
    assert reference["client"]["email"] == CONTACT.email


def test_deposit_rejects_unknown_method(wizard):
    booking_id = _ready_for_plan(wizard)
    wizard.choose_streamlined(booking_id)
    with pytest.raises(ValueError):
        wizard.start_deposit(booking_id, "bitcoin")


def test_payment_schedule_for_booking(wizard):
    booking_id = _ready_for_plan(wizard)
    wizard.choose_streamlined(booking_id)

    milestones = wizard.payment_schedule(booking_id)

    assert [m.amount for m in milestones] == [1000, 1400, 1600]


def test_client_message_gets_auto_reply(wizard):
    booking = wizard.start()
    updated = wizard.send_message(booking.id, "  Can we bring a dog?  ")

    assert [m.sender for m in updated.messages[-2:]] == ["guest", "system"]
    assert updated.messages[-2].body == "Can we bring a dog?"

    with pytest.raises(ValueError):
        wizard.send_message(booking.id, "   ")


def test_message_sent_during_sync_is_kept(store, catalog, availability):
    crm = InterruptedCrm()
    wizard = BookingWizardUseCase(
        store=store,
        estimator=ComputeEstimateUseCase(catalog),
        availability=availability,
        crm=crm,
        payments=MockSquare(),
    )
    booking_id = _ready_for_plan(wizard)
    wizard.choose_streamlined(booking_id)
    crm.during_call = lambda booking: wizard.send_message(booking.id, "Can we add a waffle bar?")

    booking, result = wizard.sync_honeybook(booking_id)

    assert result.success is True
    assert booking.synced_to_honeybook is True
    assert booking.pending_action is None
    assert "Can we add a waffle bar?" in [m.body for m in booking.messages]
    assert store.get(booking_id) == booking


def test_status_change_during_deposit_is_kept(store, catalog, availability, admin):
    payments = InterruptedPayments()
    wizard = BookingWizardUseCase(
        store=store,
        estimator=ComputeEstimateUseCase(catalog),
        availability=availability,
        crm=MockHoneyBook(),
        payments=payments,
    )
    booking_id = _ready_for_plan(wizard)
    wizard.choose_streamlined(booking_id)
    wizard.submit(booking_id)
    payments.during_call = lambda reference: admin.update_status(reference["booking_id"], RequestStatus.booked)

    booking, intent = wizard.start_deposit(booking_id, "ach")

    assert intent is not None
    assert booking.status == RequestStatus.booked
    assert booking.payment_status == PaymentStatus.deposit_processing
    assert booking.payment_reference == "mock_square_ach_token"
    assert booking.pending_action is None


def test_submitted_request_cannot_be_replanned(wizard):
    booking_id = _ready_for_plan(wizard)
    wizard.choose_streamlined(booking_id)
    wizard.submit(booking_id)

    with pytest.raises(WizardStepError):
        wizard.select_date(booking_id, date(2025, 1, 16))
    with pytest.raises(WizardStepError):
        wizard.submit_custom(booking_id, {"guest_count": 80})
    with pytest.raises(WizardStepError):
        wizard.submit_contact(booking_id, CONTACT)

    booking = wizard.get(booking_id)
    assert booking.event_date == OPEN_FRIDAY
    assert booking.estimate.total == 4000
    assert [m.amount for m in wizard.payment_schedule(booking_id)] == [1000, 1400, 1600]


def test_plan_is_locked_once_deposit_starts(wizard):
    booking_id = _ready_for_plan(wizard)
    wizard.choose_streamlined(booking_id)
    wizard.start_deposit(booking_id, "card")

    with pytest.raises(WizardStepError):
        wizard.open_custom(booking_id)
    with pytest.raises(WizardStepError):
        wizard.choose_streamlined(booking_id)

    assert wizard.get(booking_id).plan_type == PlanType.streamlined


def test_plan_edit_while_action_pending_is_rejected(wizard, store):
    booking_id = _ready_for_plan(wizard)
    wizard.choose_streamlined(booking_id)
    store.claim_action(booking_id, "deposit")

    with pytest.raises(ActionInProgressError):
        wizard.select_date(booking_id, date(2025, 1, 16))
    assert wizard.get(booking_id).estimate.total == 4000
