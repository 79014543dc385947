from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from wedding_portal.domain.entities.estimate import Estimate
from wedding_portal.domain.entities.selections import CustomSelections


class WizardStep(str, Enum):
    welcome = "welcome"
    calendar = "calendar"
    contact = "contact"
    plan = "plan"
    custom = "custom"
    review = "review"


class PlanType(str, Enum):
    streamlined = "streamlined"
    custom = "custom"


class PaymentStatus(str, Enum):
    unpaid = "unpaid"
    deposit_processing = "deposit_processing"
    deposit_paid = "deposit_paid"


class RequestStatus(str, Enum):
    draft = "draft"  # wizard not yet submitted, hidden from the admin console
    new = "new"
    in_progress = "in_progress"
    awaiting_client = "awaiting_client"
    booked = "booked"


@dataclass(frozen=True)
class ClientContact:
    primary_name: str
    email: str
    phone: str
    partner_name: str = ""
    pronouns: str = ""

    @property
    def display_name(self) -> str:
        if self.partner_name:
            return f"{self.primary_name} & {self.partner_name}"
        return self.primary_name


@dataclass(frozen=True)
class RequestMessage:
    id: str
    sender: str  # "guest", "admin", "system"
    body: str
    timestamp: float
    via_email: bool = False


@dataclass(frozen=True)
class BookingRequest:
    id: str
    created_at: float
    step: WizardStep = WizardStep.calendar
    status: RequestStatus = RequestStatus.draft
    event_date: date | None = None
    plan_type: PlanType | None = None
    client: ClientContact | None = None
    selections: CustomSelections | None = None
    estimate: Estimate | None = None
    synced_to_honeybook: bool = False
    payment_status: PaymentStatus = PaymentStatus.unpaid
    payment_reference: str | None = None
    messages: tuple[RequestMessage, ...] = field(default_factory=tuple)
    submitted_at: float | None = None
    updated_at: float | None = None
    pending_action: str | None = None  # "honeybook_sync" or "deposit" while in flight
