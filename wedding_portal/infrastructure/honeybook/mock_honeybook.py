from __future__ import annotations

import logging

from wedding_portal.application.ports.crm_sync import CrmSyncPort, CrmSyncResult
from wedding_portal.domain.entities.booking_request import BookingRequest
from wedding_portal.infrastructure.honeybook.honeybook_client import build_sync_payload


class MockHoneyBook(CrmSyncPort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.synced: list[dict] = []

    def sync_booking(self, booking: BookingRequest) -> CrmSyncResult:
        payload = build_sync_payload(booking)
        self.synced.append(payload)
        self._logger.info("Mock HoneyBook sync", extra={"booking_id": booking.id})
        return CrmSyncResult(
            success=True,
            message="HoneyBook sync stub: replace with HoneyBook API integration.",
        )
