from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from wedding_portal.application.exceptions import BookingNotFoundError
from wedding_portal.application.ports.booking_store import BookingStorePort
from wedding_portal.application.ports.notifications import EmailNotification, NotificationPort
from wedding_portal.application.use_cases.booking_wizard import new_message_id
from wedding_portal.domain.entities.booking_request import (
    BookingRequest,
    PlanType,
    RequestMessage,
    RequestStatus,
)
from wedding_portal.domain.entities.pricing import PricingCatalog


@dataclass(frozen=True)
class ReplyResult:
    booking: BookingRequest
    delivery: str  # "sent" or "error"


class AdminConsoleUseCase:
    def __init__(
        self,
        store: BookingStorePort,
        notifier: NotificationPort,
        catalog: PricingCatalog,
        business_name: str = "Tiny Diner",
        default_sender: str = "Tiny Diner Admin",
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._catalog = catalog
        self._business_name = business_name
        self._default_sender = default_sender
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def list_requests(self, status: RequestStatus | None = None) -> list[BookingRequest]:
        requests = [
            booking
            for booking in self._store.list_all()
            if booking.status != RequestStatus.draft and (status is None or booking.status == status)
        ]
        requests.sort(key=lambda booking: booking.submitted_at or 0.0, reverse=True)
        return requests

    def get_request(self, request_id: str) -> BookingRequest:
        booking = self._store.get(request_id)
        if booking is None:
            raise BookingNotFoundError(request_id)
        _require_submitted(booking)
        return booking

    def reply(self, request_id: str, body: str, sent_by: str | None = None) -> ReplyResult:
        """
        Append a staff reply to the thread and email it to the client.
        The message is kept even when the email cannot be delivered.
        """
        trimmed = body.strip()
        if not trimmed:
            raise ValueError("Reply must not be empty")

        now = self._clock()
        message = RequestMessage(
            id=new_message_id("admin"),
            sender="admin",
            body=trimmed,
            timestamp=now,
            via_email=True,
        )

        def change(booking: BookingRequest) -> BookingRequest:
            _require_submitted(booking)
            return replace(
                booking,
                status=RequestStatus.in_progress if booking.status == RequestStatus.new else booking.status,
                messages=booking.messages + (message,),
                updated_at=now,
            )

        updated = self._store.update(request_id, change)

        if updated.client is None:
            self._logger.warning("Reply stored without email, no client contact", extra={"booking_id": request_id})
            return ReplyResult(booking=updated, delivery="error")

        notification = EmailNotification(
            request_id=request_id,
            to=updated.client.email,
            subject=f"{self._business_name} Weddings • New message in your estimate",
            message=trimmed,
            sent_by=sent_by or self._default_sender,
            estimate_summary=self.estimate_summary(updated),
        )
        try:
            self._notifier.send_email(notification)
        except Exception as e:
            self._logger.exception("Email notification failed", extra={"booking_id": request_id, "error": str(e)})
            return ReplyResult(booking=updated, delivery="error")

        return ReplyResult(booking=updated, delivery="sent")

    def update_status(self, request_id: str, status: RequestStatus) -> BookingRequest:
        if status == RequestStatus.draft:
            raise ValueError("A submitted request cannot return to draft")

        now = self._clock()

        def change(booking: BookingRequest) -> BookingRequest:
            _require_submitted(booking)
            return replace(booking, status=status, updated_at=now)

        updated = self._store.update(request_id, change)
        self._logger.info("Request status changed", extra={"booking_id": request_id, "status": status.value})
        return updated

    def estimate_summary(self, booking: BookingRequest) -> dict[str, Any]:
        estimate = booking.estimate
        summary: dict[str, Any] = {
            "plan_type": booking.plan_type.value if booking.plan_type else None,
            "guest_count": None,
            "total": estimate.total if estimate else 0,
            "deposit": estimate.deposit if estimate else 0,
            "notes": "",
            "selections": [],
        }

        if booking.plan_type == PlanType.streamlined:
            summary["selections"] = [
                {"label": "Experience", "value": self._catalog.streamlined_package.name},
            ]
            return summary

        selections = booking.selections
        if selections is None:
            return summary

        summary["guest_count"] = selections.guest_count
        summary["notes"] = selections.notes
        for category in self._catalog.categories:
            option = category.resolve_option(selections.choice_for(category.key))
            summary["selections"].append({"label": category.label, "value": option.title})
        return summary


def _require_submitted(booking: BookingRequest) -> None:
    # drafts are invisible to staff
    if booking.status == RequestStatus.draft:
        raise BookingNotFoundError(booking.id)
