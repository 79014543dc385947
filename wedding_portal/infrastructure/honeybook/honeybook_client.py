from __future__ import annotations

import logging
from typing import Any

import httpx

from wedding_portal.application.exceptions import IntegrationError
from wedding_portal.application.ports.crm_sync import CrmSyncPort, CrmSyncResult
from wedding_portal.domain.entities.booking_request import BookingRequest


class HoneyBookClient(CrmSyncPort):
    def __init__(self, api_key: str, base_url: str, client: httpx.Client | None = None) -> None:
        if not api_key:
            raise ValueError("HONEYBOOK_API_KEY is required for HoneyBook sync")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

    def sync_booking(self, booking: BookingRequest) -> CrmSyncResult:
        url = f"{self._base_url}/projects"
        headers = {"Authorization": f"Bearer {self._api_key}"}
        try:
            resp = self._client.post(url, json=build_sync_payload(booking), headers=headers)
        except httpx.HTTPError as e:
            self._logger.error("HoneyBook request failed", extra={"booking_id": booking.id, "error": str(e)})
            raise IntegrationError("Unable to sync with HoneyBook") from e

        if resp.status_code >= 400:
            self._logger.error(
                "HoneyBook sync failed",
                extra={"booking_id": booking.id, "status": resp.status_code, "error": resp.text[:200]},
            )
            raise IntegrationError("Unable to sync with HoneyBook")

        data = resp.json() if resp.content else {}
        return CrmSyncResult(
            success=True,
            message="Booking synced to HoneyBook.",
            external_id=str(data.get("id")) if data.get("id") is not None else None,
        )


def build_sync_payload(booking: BookingRequest) -> dict[str, Any]:
    client = booking.client
    estimate = booking.estimate
    return {
        "reference": booking.id,
        "event_date": booking.event_date.isoformat() if booking.event_date else None,
        "plan_type": booking.plan_type.value if booking.plan_type else None,
        "client": {
            "name": client.display_name,
            "email": client.email,
            "phone": client.phone,
            "pronouns": client.pronouns,
        }
        if client
        else None,
        "estimate": {
            "line_items": [
                {"vendor": item.vendor, "label": item.label, "amount": item.amount}
                for item in estimate.line_items
            ],
            "total": estimate.total,
            "deposit": estimate.deposit,
        }
        if estimate
        else None,
    }
