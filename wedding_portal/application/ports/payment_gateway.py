from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DepositIntent:
    client_secret: str
    message: str


class PaymentGatewayPort(ABC):
    @abstractmethod
    def create_deposit_intent(
        self,
        amount: int,
        method: str,
        booking_reference: dict[str, Any],
    ) -> DepositIntent:
        """Create a deposit payment intent. method is "ach" or "card"."""
        raise NotImplementedError
