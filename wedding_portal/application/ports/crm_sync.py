from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from wedding_portal.domain.entities.booking_request import BookingRequest


@dataclass(frozen=True)
class CrmSyncResult:
    success: bool
    message: str
    external_id: str | None = None


class CrmSyncPort(ABC):
    @abstractmethod
    def sync_booking(self, booking: BookingRequest) -> CrmSyncResult:
        """Push the booking and its estimate to the CRM (HoneyBook)."""
        raise NotImplementedError
