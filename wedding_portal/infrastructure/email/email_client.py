from __future__ import annotations

import logging
from typing import Any

import httpx

from wedding_portal.application.exceptions import IntegrationError
from wedding_portal.application.ports.notifications import EmailNotification, NotificationPort


def render_estimate_summary(summary: dict[str, Any]) -> str:
    """Plain-text estimate block appended under the staff message."""
    if not summary:
        return ""

    lines = ["Your estimate"]
    if summary.get("plan_type"):
        lines.append(f"Plan: {summary['plan_type']}")
    if summary.get("guest_count"):
        lines.append(f"Guests: {summary['guest_count']}")
    lines.append(f"Total: ${summary.get('total', 0):,}")
    lines.append(f"Deposit: ${summary.get('deposit', 0):,}")
    for selection in summary.get("selections", []):
        lines.append(f"- {selection['label']}: {selection['value']}")
    if summary.get("notes"):
        lines.append(f"Notes: {summary['notes']}")
    return "\n".join(lines)


class EmailClient(NotificationPort):
    def __init__(
        self,
        api_key: str,
        send_endpoint: str,
        from_address: str,
        client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._send_endpoint = send_endpoint
        self._from_address = from_address
        self._client = client or httpx.Client(timeout=10.0)
        self._logger = logging.getLogger(__name__)

    def send_email(self, notification: EmailNotification) -> None:
        body = notification.message
        summary_text = render_estimate_summary(notification.estimate_summary)
        if summary_text:
            body = f"{body}\n\n{summary_text}"

        payload = {
            "personalizations": [{"to": [{"email": notification.to}]}],
            "from": {"email": self._from_address, "name": notification.sent_by},
            "subject": notification.subject,
            "content": [{"type": "text/plain", "value": body}],
            "custom_args": {"request_id": notification.request_id},
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}
        try:
            resp = self._client.post(self._send_endpoint, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise IntegrationError("Unable to dispatch email notification") from e

        if resp.status_code >= 400:
            self._logger.error(
                "Email dispatch failed",
                extra={"booking_id": notification.request_id, "status": resp.status_code},
            )
            raise IntegrationError("Unable to dispatch email notification")
