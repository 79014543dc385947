from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from wedding_portal.application.utils.money import round_half_up
from wedding_portal.domain.entities.availability import AvailabilityStatus
from wedding_portal.domain.entities.booking_request import (
    BookingRequest,
    PaymentStatus,
    PlanType,
    RequestStatus,
    WizardStep,
)
from wedding_portal.domain.entities.estimate import Estimate, PaymentMilestone
from wedding_portal.domain.entities.pricing import PricingCatalog, PricingType

# category key -> request field holding the chosen option
CHOICE_FIELDS = {
    "food": "food_style",
    "beverage": "beverage",
    "cake": "cake",
    "floral": "floral",
    "coordinator": "coordinator",
    "officiant": "officiant",
}


class PaymentMethod(str, Enum):
    ach = "ach"
    card = "card"


class ServiceOptionSchema(BaseModel):
    value: str
    title: str
    subtitle: str
    pricing_type: PricingType
    default_price: float
    vendor: str


class ServiceCategorySchema(BaseModel):
    key: str
    label: str
    vendor: str
    default_value: str
    options: list[ServiceOptionSchema]


class StreamlinedPackageSchema(BaseModel):
    name: str
    headline: str
    description: str
    inclusions: list[str]
    price: int
    deposit: int


class CatalogResponseSchema(BaseModel):
    venue_vendor: str
    venue_label: str
    venue_fee: int
    deposit_rate: float
    min_guests: int
    max_guests: int
    default_guest_count: int
    categories: list[ServiceCategorySchema]
    streamlined_package: StreamlinedPackageSchema


class CustomSelectionsRequestSchema(BaseModel):
    """
    Raw custom-plan form values. Fields accept any JSON value; anything
    missing, malformed or out of range is normalized and reported in the
    estimate adjustments instead of failing validation.
    """

    guest_count: Any = None
    food_style: Any = None
    beverage: Any = None
    cake: Any = None
    floral: Any = None
    coordinator: Any = None
    officiant: Any = None
    food_price: Any = None
    beverage_price: Any = None
    cake_price: Any = None
    floral_price: Any = None
    coordinator_price: Any = None
    officiant_price: Any = None
    notes: Any = None

    def to_raw(self) -> dict[str, Any]:
        choices: dict[str, Any] = {}
        prices: dict[str, Any] = {}
        for key, field_name in CHOICE_FIELDS.items():
            value = getattr(self, field_name)
            if value is not None:
                choices[key] = value
            price = getattr(self, f"{key}_price")
            if price is not None:
                prices[key] = price
        return {
            "guest_count": self.guest_count,
            "choices": choices,
            "prices": prices,
            "notes": self.notes,
        }


class EstimateLineItemSchema(BaseModel):
    vendor: str
    label: str
    amount: int


class EstimateSchema(BaseModel):
    line_items: list[EstimateLineItemSchema]
    total: int
    deposit: int
    guest_count: int | None = None
    adjustments: list[str] = Field(default_factory=list)


class AvailabilitySchema(BaseModel):
    day: date
    status: AvailabilityStatus
    bookable: bool


class AvailabilityRangeSchema(BaseModel):
    start: date
    end: date
    days: list[AvailabilitySchema]


class ContactRequestSchema(BaseModel):
    primary_name: str = Field(min_length=2)
    partner_name: str = ""
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str = Field(min_length=7)
    pronouns: str = ""


class DateRequestSchema(BaseModel):
    event_date: date


class DepositRequestSchema(BaseModel):
    method: PaymentMethod = PaymentMethod.ach


class MessageRequestSchema(BaseModel):
    body: str = Field(min_length=1, max_length=2000)


class ClientSchema(BaseModel):
    primary_name: str
    partner_name: str
    email: str
    phone: str
    pronouns: str


class MessageSchema(BaseModel):
    id: str
    sender: str
    body: str
    timestamp: float
    via_email: bool = False


class SelectionsSchema(BaseModel):
    guest_count: int
    choices: dict[str, str]
    prices: dict[str, float]
    notes: str


class BookingResponseSchema(BaseModel):
    id: str
    step: WizardStep
    status: RequestStatus
    event_date: date | None = None
    plan_type: PlanType | None = None
    client: ClientSchema | None = None
    selections: SelectionsSchema | None = None
    estimate: EstimateSchema | None = None
    synced_to_honeybook: bool
    payment_status: PaymentStatus
    messages: list[MessageSchema]
    created_at: float
    submitted_at: float | None = None
    updated_at: float | None = None


class SyncResponseSchema(BaseModel):
    booking: BookingResponseSchema
    success: bool
    message: str


class DepositResponseSchema(BaseModel):
    booking: BookingResponseSchema
    client_secret: str | None = None
    message: str


class PaymentMilestoneSchema(BaseModel):
    label: str
    amount: int
    due: str
    status: str


class PaymentScheduleResponseSchema(BaseModel):
    booking_id: str
    payment_status: PaymentStatus
    milestones: list[PaymentMilestoneSchema]


class AdminReplyRequestSchema(BaseModel):
    body: str = Field(min_length=1, max_length=5000)
    sent_by: str | None = None


class AdminReplyResponseSchema(BaseModel):
    request: BookingResponseSchema
    delivery: str


class StatusUpdateRequestSchema(BaseModel):
    status: RequestStatus


class AdminRequestListSchema(BaseModel):
    requests: list[BookingResponseSchema]


def catalog_to_schema(catalog: PricingCatalog) -> CatalogResponseSchema:
    package = catalog.streamlined_package
    return CatalogResponseSchema(
        venue_vendor=catalog.venue_vendor,
        venue_label=catalog.venue_label,
        venue_fee=catalog.venue_fee,
        deposit_rate=catalog.deposit_rate,
        min_guests=catalog.min_guests,
        max_guests=catalog.max_guests,
        default_guest_count=catalog.default_guest_count,
        categories=[
            ServiceCategorySchema(
                key=category.key,
                label=category.label,
                vendor=category.vendor,
                default_value=category.default_value,
                options=[
                    ServiceOptionSchema(
                        value=option.value,
                        title=option.title,
                        subtitle=option.subtitle,
                        pricing_type=option.pricing_type,
                        default_price=option.default_price,
                        vendor=option.vendor_override or category.vendor,
                    )
                    for option in category.options
                ],
            )
            for category in catalog.categories
        ],
        streamlined_package=StreamlinedPackageSchema(
            name=package.name,
            headline=package.headline,
            description=package.description,
            inclusions=list(package.inclusions),
            price=package.price,
            deposit=round_half_up(package.price * package.deposit_rate),
        ),
    )


def estimate_to_schema(estimate: Estimate) -> EstimateSchema:
    return EstimateSchema(
        line_items=[
            EstimateLineItemSchema(vendor=item.vendor, label=item.label, amount=item.amount)
            for item in estimate.line_items
        ],
        total=estimate.total,
        deposit=estimate.deposit,
        guest_count=estimate.guest_count,
        adjustments=list(estimate.adjustments),
    )


def milestones_to_schema(milestones: list[PaymentMilestone]) -> list[PaymentMilestoneSchema]:
    return [
        PaymentMilestoneSchema(label=m.label, amount=m.amount, due=m.due, status=m.status)
        for m in milestones
    ]


def booking_to_schema(booking: BookingRequest) -> BookingResponseSchema:
    client = booking.client
    selections = booking.selections
    return BookingResponseSchema(
        id=booking.id,
        step=booking.step,
        status=booking.status,
        event_date=booking.event_date,
        plan_type=booking.plan_type,
        client=ClientSchema(
            primary_name=client.primary_name,
            partner_name=client.partner_name,
            email=client.email,
            phone=client.phone,
            pronouns=client.pronouns,
        )
        if client
        else None,
        selections=SelectionsSchema(
            guest_count=selections.guest_count,
            choices=dict(selections.choices),
            prices=dict(selections.prices),
            notes=selections.notes,
        )
        if selections
        else None,
        estimate=estimate_to_schema(booking.estimate) if booking.estimate else None,
        synced_to_honeybook=booking.synced_to_honeybook,
        payment_status=booking.payment_status,
        messages=[
            MessageSchema(
                id=m.id,
                sender=m.sender,
                body=m.body,
                timestamp=m.timestamp,
                via_email=m.via_email,
            )
            for m in booking.messages
        ],
        created_at=booking.created_at,
        submitted_at=booking.submitted_at,
        updated_at=booking.updated_at,
    )
