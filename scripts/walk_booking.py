#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
from typing import Any

import httpx
from httpx import ConnectError


def build_custom_plan(guest_count: int) -> dict[str, Any]:
    return {
        "guest_count": guest_count,
        "food_style": "plated",
        "beverage": "cocktails",
        "cake": "need",
        "floral": "inHouse",
        "coordinator": "fullPlanning",
        "officiant": "notRequired",
        "notes": "Booth seating for grandparents",
    }


def step(client: httpx.Client, method: str, path: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
    resp = client.request(method, path, json=payload)
    print(f"{method} {path} -> {resp.status_code}")
    resp.raise_for_status()
    return resp.json()


def main() -> None:
    parser = argparse.ArgumentParser(description="Walk one booking request through the wizard")
    parser.add_argument("--url", default="http://127.0.0.1:8001/api/v1")
    parser.add_argument("--date", default="2027-03-05", help="ISO event date (Thu/Fri/Sat)")
    parser.add_argument("--guests", type=int, default=32)
    parser.add_argument("--email", default="couple@example.com")
    parser.add_argument("--streamlined", action="store_true")
    args = parser.parse_args()

    with httpx.Client(base_url=args.url, timeout=10.0) as client:
        try:
            booking = step(client, "POST", "/bookings")
        except ConnectError:
            print("Connection refused. Is the FastAPI server running?")
            return

        booking_id = booking["id"]
        try:
            step(client, "PUT", f"/bookings/{booking_id}/date", {"event_date": args.date})
            step(
                client,
                "PUT",
                f"/bookings/{booking_id}/contact",
                {"primary_name": "Sam Carter", "partner_name": "Riley Moore", "email": args.email, "phone": "612-555-0100"},
            )
            if args.streamlined:
                booking = step(client, "POST", f"/bookings/{booking_id}/plan/streamlined")
            else:
                booking = step(client, "POST", f"/bookings/{booking_id}/plan/custom", build_custom_plan(args.guests))
            step(client, "POST", f"/bookings/{booking_id}/honeybook")
            step(client, "POST", f"/bookings/{booking_id}/payments/deposit", {"method": "ach"})
            schedule = step(client, "GET", f"/bookings/{booking_id}/payment-schedule")
            step(client, "POST", f"/bookings/{booking_id}/submit")
        except httpx.HTTPStatusError as e:
            print(f"HTTP Error: {e.response.status_code}")
            print(f"Response: {e.response.text}")
            return

    print(json.dumps(booking["estimate"], indent=2))
    print(json.dumps(schedule["milestones"], indent=2))


if __name__ == "__main__":
    main()
