from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from wedding_portal.api.v1.errors import HANDLED_ERRORS, to_http_error
from wedding_portal.api.v1.schemas import (
    AvailabilityRangeSchema,
    AvailabilitySchema,
    BookingResponseSchema,
    CatalogResponseSchema,
    ContactRequestSchema,
    CustomSelectionsRequestSchema,
    DateRequestSchema,
    DepositRequestSchema,
    DepositResponseSchema,
    EstimateSchema,
    MessageRequestSchema,
    PaymentScheduleResponseSchema,
    SyncResponseSchema,
    booking_to_schema,
    catalog_to_schema,
    estimate_to_schema,
    milestones_to_schema,
)
from wedding_portal.application.use_cases.booking_wizard import BookingWizardUseCase
from wedding_portal.application.use_cases.classify_availability import ClassifyAvailabilityUseCase
from wedding_portal.application.use_cases.compute_estimate import ComputeEstimateUseCase
from wedding_portal.domain.entities.availability import AvailabilityStatus
from wedding_portal.domain.entities.booking_request import ClientContact
from wedding_portal.wiring.dependencies import (
    get_availability_use_case,
    get_booking_wizard,
    get_estimate_use_case,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/catalog", response_model=CatalogResponseSchema)
def get_catalog(uc: ComputeEstimateUseCase = Depends(get_estimate_use_case)):
    return catalog_to_schema(uc.catalog)


@router.post("/estimates", response_model=EstimateSchema)
def create_estimate(
    req: CustomSelectionsRequestSchema,
    uc: ComputeEstimateUseCase = Depends(get_estimate_use_case),
):
    _, estimate = uc.execute(req.to_raw())
    return estimate_to_schema(estimate)


@router.get("/availability", response_model=AvailabilityRangeSchema)
def get_availability_range(
    start: date = Query(...),
    end: date = Query(...),
    uc: ClassifyAvailabilityUseCase = Depends(get_availability_use_case),
):
    try:
        days = uc.month(start, end)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return AvailabilityRangeSchema(
        start=start,
        end=end,
        days=[
            AvailabilitySchema(day=day, status=status, bookable=status == AvailabilityStatus.available)
            for day, status in days
        ],
    )


@router.get("/availability/{day}", response_model=AvailabilitySchema)
def get_availability(
    day: date,
    uc: ClassifyAvailabilityUseCase = Depends(get_availability_use_case),
):
    status = uc.classify(day)
    return AvailabilitySchema(day=day, status=status, bookable=status == AvailabilityStatus.available)


@router.post("/bookings", response_model=BookingResponseSchema, status_code=201)
def start_booking(uc: BookingWizardUseCase = Depends(get_booking_wizard)):
    return booking_to_schema(uc.start())


@router.get("/bookings/{booking_id}", response_model=BookingResponseSchema)
def get_booking(booking_id: str, uc: BookingWizardUseCase = Depends(get_booking_wizard)):
    try:
        booking = uc.get(booking_id)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
    return booking_to_schema(booking)


@router.put("/bookings/{booking_id}/date", response_model=BookingResponseSchema)
def select_date(
    booking_id: str,
    req: DateRequestSchema,
    uc: BookingWizardUseCase = Depends(get_booking_wizard),
):
    try:
        booking = uc.select_date(booking_id, req.event_date)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
    return booking_to_schema(booking)


@router.put("/bookings/{booking_id}/contact", response_model=BookingResponseSchema)
def submit_contact(
    booking_id: str,
    req: ContactRequestSchema,
    uc: BookingWizardUseCase = Depends(get_booking_wizard),
):
    contact = ClientContact(
        primary_name=req.primary_name.strip(),
        partner_name=req.partner_name.strip(),
        email=req.email.strip(),
        phone=req.phone.strip(),
        pronouns=req.pronouns.strip(),
    )
    try:
        booking = uc.submit_contact(booking_id, contact)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
    return booking_to_schema(booking)


@router.post("/bookings/{booking_id}/plan/streamlined", response_model=BookingResponseSchema)
def choose_streamlined(booking_id: str, uc: BookingWizardUseCase = Depends(get_booking_wizard)):
    try:
        booking = uc.choose_streamlined(booking_id)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
    return booking_to_schema(booking)


@router.post("/bookings/{booking_id}/plan/custom/open", response_model=BookingResponseSchema)
def open_custom(booking_id: str, uc: BookingWizardUseCase = Depends(get_booking_wizard)):
    try:
        booking = uc.open_custom(booking_id)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
    return booking_to_schema(booking)


@router.post("/bookings/{booking_id}/plan/custom", response_model=BookingResponseSchema)
def submit_custom(
    booking_id: str,
    req: CustomSelectionsRequestSchema,
    uc: BookingWizardUseCase = Depends(get_booking_wizard),
):
    try:
        booking = uc.submit_custom(booking_id, req.to_raw())
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
    return booking_to_schema(booking)


@router.post("/bookings/{booking_id}/submit", response_model=BookingResponseSchema)
def submit_booking(booking_id: str, uc: BookingWizardUseCase = Depends(get_booking_wizard)):
    try:
        booking = uc.submit(booking_id)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
    return booking_to_schema(booking)


@router.post("/bookings/{booking_id}/honeybook", response_model=SyncResponseSchema)
def sync_honeybook(booking_id: str, uc: BookingWizardUseCase = Depends(get_booking_wizard)):
    try:
        booking, result = uc.sync_honeybook(booking_id)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
    return SyncResponseSchema(booking=booking_to_schema(booking), success=result.success, message=result.message)


@router.post("/bookings/{booking_id}/payments/deposit", response_model=DepositResponseSchema)
def start_deposit(
    booking_id: str,
    req: DepositRequestSchema,
    uc: BookingWizardUseCase = Depends(get_booking_wizard),
):
    try:
        booking, intent = uc.start_deposit(booking_id, req.method.value)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)

    if intent is None:
        return DepositResponseSchema(
            booking=booking_to_schema(booking),
            message=f"Deposit already {booking.payment_status.value}.",
        )
    return DepositResponseSchema(
        booking=booking_to_schema(booking),
        client_secret=intent.client_secret,
        message=intent.message,
    )


@router.get("/bookings/{booking_id}/payment-schedule", response_model=PaymentScheduleResponseSchema)
def get_payment_schedule(booking_id: str, uc: BookingWizardUseCase = Depends(get_booking_wizard)):
    try:
        booking = uc.get(booking_id)
        milestones = uc.payment_schedule(booking_id)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
    return PaymentScheduleResponseSchema(
        booking_id=booking_id,
        payment_status=booking.payment_status,
        milestones=milestones_to_schema(milestones),
    )


@router.post("/bookings/{booking_id}/messages", response_model=BookingResponseSchema)
def send_message(
    booking_id: str,
    req: MessageRequestSchema,
    uc: BookingWizardUseCase = Depends(get_booking_wizard),
):
    try:
        booking = uc.send_message(booking_id, req.body)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
    return booking_to_schema(booking)
