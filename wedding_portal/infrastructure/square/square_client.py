from __future__ import annotations

import logging
import uuid
from typing import Any

import httpx

from wedding_portal.application.exceptions import IntegrationError
from wedding_portal.application.ports.payment_gateway import DepositIntent, PaymentGatewayPort


class SquareClient(PaymentGatewayPort):
    def __init__(
        self,
        access_token: str,
        location_id: str,
        base_url: str,
        client: httpx.Client | None = None,
    ) -> None:
        if not access_token or not location_id:
            raise ValueError("SQUARE_ACCESS_TOKEN and SQUARE_LOCATION_ID are required for Square payments")
        self._access_token = access_token
        self._location_id = location_id
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

    def create_deposit_intent(
        self,
        amount: int,
        method: str,
        booking_reference: dict[str, Any],
    ) -> DepositIntent:
        booking_id = booking_reference.get("booking_id")
        payload = {
            "idempotency_key": str(uuid.uuid4()),
            "quick_pay": {
                "name": f"Wedding deposit {booking_id}",
                "price_money": {"amount": amount * 100, "currency": "USD"},
                "location_id": self._location_id,
            },
            "checkout_options": {"accepted_payment_methods": {"ach": method == "ach"}},
            "payment_note": f"event_date={booking_reference.get('date')}",
        }
        headers = {"Authorization": f"Bearer {self._access_token}"}
        try:
            resp = self._client.post(f"{self._base_url}/online-checkout/payment-links", json=payload, headers=headers)
        except httpx.HTTPError as e:
            self._logger.error("Square request failed", extra={"booking_id": booking_id, "error": str(e)})
            raise IntegrationError("Unable to create Square payment intent") from e

        if resp.status_code >= 400:
            self._logger.error(
                "Square deposit intent failed",
                extra={"booking_id": booking_id, "status": resp.status_code, "error": resp.text[:200]},
            )
            raise IntegrationError("Unable to create Square payment intent")

        link = resp.json().get("payment_link") or {}
        if not link.get("id"):
            raise IntegrationError("Square response did not include a payment link")
        return DepositIntent(client_secret=str(link["id"]), message=link.get("url") or "Square payment link created.")
