"""
Tests for the outbound HTTP adapters, run against httpx.MockTransport.
"""

from __future__ import annotations

import json

import httpx
import pytest

from wedding_portal.application.exceptions import IntegrationError
from wedding_portal.application.ports.notifications import EmailNotification
from wedding_portal.infrastructure.email.email_client import EmailClient, render_estimate_summary

SUMMARY = {
    "plan_type": "custom",
    "guest_count": 32,
    "total": 9264,
    "deposit": 2316,
    "notes": "Waffle bar at midnight",
    "selections": [
        {"label": "Food", "value": "Plated dinner"},
        {"label": "Beverage", "value": "Signature cocktails"},
    ],
}


def _notification(summary):
    return EmailNotification(
        request_id="REQ-2401",
        to="alex+jordan@example.com",
        subject="Tiny Diner Weddings • New message in your estimate",
        message="Patio lighting photos attached!",
        sent_by="Tiny Diner Admin",
        estimate_summary=summary,
    )


def _client(handler) -> EmailClient:
    return EmailClient(
        api_key="sg-test",
        send_endpoint="https://mail.example.com/v3/mail/send",
        from_address="events@tinydiner.com",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def test_email_body_carries_estimate_summary():
    captured = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(202)

    _client(handler).send_email(_notification(SUMMARY))

    request = captured[0]
    assert request.headers["Authorization"] == "Bearer sg-test"
    payload = json.loads(request.content)
    body = payload["content"][0]["value"]
    assert body.startswith("Patio lighting photos attached!\n\n")
    assert "Guests: 32" in body
    assert "Total: $9,264" in body
    assert "Deposit: $2,316" in body
    assert "- Food: Plated dinner" in body
    assert "Notes: Waffle bar at midnight" in body
    assert payload["custom_args"] == {"request_id": "REQ-2401"}


def test_streamlined_summary_has_no_guest_line():
    text = render_estimate_summary(
        {
            "plan_type": "streamlined",
            "guest_count": None,
            "total": 4000,
            "deposit": 1000,
            "notes": "",
            "selections": [{"label": "Experience", "value": "Tiny Diner Signature"}],
        }
    )

    assert text.splitlines() == [
        "Your estimate",
        "Plan: streamlined",
        "Total: $4,000",
        "Deposit: $1,000",
        "- Experience: Tiny Diner Signature",
    ]


def test_email_without_summary_is_message_only():
    captured = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(json.loads(request.content))
        return httpx.Response(202)

    _client(handler).send_email(_notification({}))

    assert captured[0]["content"][0]["value"] == "Patio lighting photos attached!"


def test_email_provider_error_raises():
    client = _client(lambda request: httpx.Response(500, json={"errors": ["boom"]}))

    with pytest.raises(IntegrationError):
        client.send_email(_notification(SUMMARY))
