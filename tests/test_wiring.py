"""
Tests for which adapters the dependency factories hand out.
"""

from __future__ import annotations

import tempfile

from wedding_portal.infrastructure.store.json_store import JsonBookingStore
from wedding_portal.infrastructure.store.memory_store import MemoryBookingStore
from wedding_portal.wiring import dependencies


def test_booking_store_is_durable_outside_dev(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.setattr(dependencies, "_booking_store", None)
        monkeypatch.setattr(dependencies.settings, "ENV", "prod")
        monkeypatch.setattr(dependencies.settings, "BOOKING_DATA_DIR", tmpdir)

        store = dependencies.get_booking_store()

        assert isinstance(store, JsonBookingStore)
        assert dependencies.get_booking_store() is store


def test_memory_store_is_opt_in(monkeypatch):
    monkeypatch.setattr(dependencies, "_booking_store", None)
    monkeypatch.setattr(dependencies.settings, "BOOKING_STORE", "memory")

    assert isinstance(dependencies.get_booking_store(), MemoryBookingStore)
