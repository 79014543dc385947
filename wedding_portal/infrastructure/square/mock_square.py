from __future__ import annotations

import logging
from typing import Any

from wedding_portal.application.ports.payment_gateway import DepositIntent, PaymentGatewayPort


class MockSquare(PaymentGatewayPort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def create_deposit_intent(
        self,
        amount: int,
        method: str,
        booking_reference: dict[str, Any],
    ) -> DepositIntent:
        self._logger.info(
            "Mock Square deposit intent",
            extra={"booking_id": booking_reference.get("booking_id"), "amount": amount, "method": method},
        )
        return DepositIntent(
            client_secret="mock_square_ach_token",
            message="Square payment stub: connect to Square ACH/credit APIs here.",
        )
