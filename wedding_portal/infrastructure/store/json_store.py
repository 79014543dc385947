from __future__ import annotations

import json
import logging
import re
import threading
from collections.abc import Callable
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Any

from wedding_portal.application.exceptions import ActionInProgressError, BookingNotFoundError
from wedding_portal.application.ports.booking_store import BookingStorePort
from wedding_portal.domain.entities.booking_request import (
    BookingRequest,
    ClientContact,
    PaymentStatus,
    PlanType,
    RequestMessage,
    RequestStatus,
    WizardStep,
)
from wedding_portal.domain.entities.estimate import Estimate, EstimateLineItem
from wedding_portal.domain.entities.selections import CustomSelections

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


class JsonBookingStore(BookingStorePort):
    """One JSON file per booking request, written atomically."""

    def __init__(self, data_dir: str = "./data/bookings") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, booking_id: str) -> threading.Lock:
        with self._lock_lock:
            if booking_id not in self._locks:
                self._locks[booking_id] = threading.Lock()
            return self._locks[booking_id]

    def _get_file_path(self, booking_id: str) -> Path:
        if not _SAFE_ID.match(booking_id):
            raise ValueError(f"Invalid booking id: {booking_id!r}")
        return self._data_dir / f"{booking_id}.json"

    def _load(self, file_path: Path) -> BookingRequest | None:
        if not file_path.exists():
            return None
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return self._deserialize(json.load(f))
        except (json.JSONDecodeError, IOError, KeyError, ValueError) as e:
            self._logger.error("Unreadable booking file", extra={"path": str(file_path), "error": str(e)})
            return None

    def _write(self, booking: BookingRequest) -> None:
        file_path = self._get_file_path(booking.id)
        temp_path = file_path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(self._serialize(booking), f, indent=2, ensure_ascii=False)
            # Atomic rename
            temp_path.replace(file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise

    def get(self, booking_id: str) -> BookingRequest | None:
        if not _SAFE_ID.match(booking_id):
            return None
        with self._get_lock(booking_id):
            return self._load(self._get_file_path(booking_id))

    def save(self, booking: BookingRequest) -> None:
        with self._get_lock(booking.id):
            self._write(booking)

    def update(
        self,
        booking_id: str,
        change: Callable[[BookingRequest], BookingRequest],
    ) -> BookingRequest:
        if not _SAFE_ID.match(booking_id):
            raise BookingNotFoundError(booking_id)
        with self._get_lock(booking_id):
            booking = self._load(self._get_file_path(booking_id))
            if booking is None:
                raise BookingNotFoundError(booking_id)
            updated = change(booking)
            self._write(updated)
            return updated

    def list_all(self) -> list[BookingRequest]:
        bookings: list[BookingRequest] = []
        for file_path in sorted(self._data_dir.glob("*.json")):
            booking = self._load(file_path)
            if booking is not None:
                bookings.append(booking)
        return bookings

    def claim_action(self, booking_id: str, action: str) -> BookingRequest:
        with self._get_lock(booking_id):
            booking = self._load(self._get_file_path(booking_id))
            if booking is None:
                raise BookingNotFoundError(booking_id)
            if booking.pending_action is not None:
                raise ActionInProgressError(f"{booking.pending_action} already in progress for {booking_id}")
            claimed = replace(booking, pending_action=action)
            self._write(claimed)
            return claimed

    def release_action(self, booking_id: str) -> None:
        with self._get_lock(booking_id):
            booking = self._load(self._get_file_path(booking_id))
            if booking is not None:
                self._write(replace(booking, pending_action=None))

    def _serialize(self, booking: BookingRequest) -> dict[str, Any]:
        client = booking.client
        selections = booking.selections
        estimate = booking.estimate
        return {
            "id": booking.id,
            "created_at": booking.created_at,
            "step": booking.step.value,
            "status": booking.status.value,
            "event_date": booking.event_date.isoformat() if booking.event_date else None,
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
            "selections": {
                "guest_count": selections.guest_count,
                "choices": dict(selections.choices),
                "prices": dict(selections.prices),
                "notes": selections.notes,
            }
            if selections
            else None,
            "estimate": {
                "line_items": [
                    {"vendor": item.vendor, "label": item.label, "amount": item.amount}
                    for item in estimate.line_items
                ],
                "total": estimate.total,
                "deposit": estimate.deposit,
                "guest_count": estimate.guest_count,
                "adjustments": list(estimate.adjustments),
            }
            if estimate
            else None,
            "synced_to_honeybook": booking.synced_to_honeybook,
            "payment_status": booking.payment_status.value,
            "payment_reference": booking.payment_reference,
            "messages": [
                {
                    "id": message.id,
                    "sender": message.sender,
                    "body": message.body,
                    "timestamp": message.timestamp,
                    "via_email": message.via_email,
                }
                for message in booking.messages
            ],
            "submitted_at": booking.submitted_at,
            "updated_at": booking.updated_at,
            "pending_action": booking.pending_action,
            "version": 1,
        }

    def _deserialize(self, data: dict[str, Any]) -> BookingRequest:
        client_data = data.get("client")
        selections_data = data.get("selections")
        estimate_data = data.get("estimate")

        return BookingRequest(
            id=data["id"],
            created_at=data["created_at"],
            step=WizardStep(data.get("step", WizardStep.calendar.value)),
            status=RequestStatus(data.get("status", RequestStatus.draft.value)),
            event_date=date.fromisoformat(data["event_date"]) if data.get("event_date") else None,
            plan_type=PlanType(data["plan_type"]) if data.get("plan_type") else None,
            client=ClientContact(
                primary_name=client_data["primary_name"],
                email=client_data["email"],
                phone=client_data["phone"],
                partner_name=client_data.get("partner_name", ""),
                pronouns=client_data.get("pronouns", ""),
            )
            if client_data
            else None,
            selections=CustomSelections(
                guest_count=selections_data["guest_count"],
                choices=dict(selections_data.get("choices", {})),
                prices=dict(selections_data.get("prices", {})),
                notes=selections_data.get("notes", ""),
            )
            if selections_data
            else None,
            estimate=Estimate(
                line_items=tuple(
                    EstimateLineItem(vendor=item["vendor"], label=item["label"], amount=item["amount"])
                    for item in estimate_data.get("line_items", [])
                ),
                total=estimate_data["total"],
                deposit=estimate_data["deposit"],
                guest_count=estimate_data.get("guest_count"),
                adjustments=tuple(estimate_data.get("adjustments", [])),
            )
            if estimate_data
            else None,
            synced_to_honeybook=data.get("synced_to_honeybook", False),
            payment_status=PaymentStatus(data.get("payment_status", PaymentStatus.unpaid.value)),
            payment_reference=data.get("payment_reference"),
            messages=tuple(
                RequestMessage(
                    id=message["id"],
                    sender=message["sender"],
                    body=message["body"],
                    timestamp=message["timestamp"],
                    via_email=message.get("via_email", False),
                )
                for message in data.get("messages", [])
            ),
            submitted_at=data.get("submitted_at"),
            updated_at=data.get("updated_at"),
            pending_action=data.get("pending_action"),
        )
