from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import replace

from wedding_portal.application.exceptions import ActionInProgressError, BookingNotFoundError
from wedding_portal.application.ports.booking_store import BookingStorePort
from wedding_portal.domain.entities.booking_request import BookingRequest


class MemoryBookingStore(BookingStorePort):
    def __init__(self) -> None:
        self._bookings: dict[str, BookingRequest] = {}
        self._lock = threading.Lock()

    def get(self, booking_id: str) -> BookingRequest | None:
        with self._lock:
            return self._bookings.get(booking_id)

    def save(self, booking: BookingRequest) -> None:
        with self._lock:
            self._bookings[booking.id] = booking

    def update(
        self,
        booking_id: str,
        change: Callable[[BookingRequest], BookingRequest],
    ) -> BookingRequest:
        with self._lock:
            booking = self._bookings.get(booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)
            updated = change(booking)
            self._bookings[booking_id] = updated
            return updated

    def list_all(self) -> list[BookingRequest]:
        with self._lock:
            return list(self._bookings.values())

    def claim_action(self, booking_id: str, action: str) -> BookingRequest:
        with self._lock:
            booking = self._bookings.get(booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)
            if booking.pending_action is not None:
                raise ActionInProgressError(f"{booking.pending_action} already in progress for {booking_id}")
            claimed = replace(booking, pending_action=action)
            self._bookings[booking_id] = claimed
            return claimed

    def release_action(self, booking_id: str) -> None:
        with self._lock:
            booking = self._bookings.get(booking_id)
            if booking is not None:
                self._bookings[booking_id] = replace(booking, pending_action=None)
