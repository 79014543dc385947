from __future__ import annotations

import logging

from wedding_portal.application.ports.notifications import EmailNotification, NotificationPort


class MockEmail(NotificationPort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.sent: list[EmailNotification] = []

    def send_email(self, notification: EmailNotification) -> None:
        self.sent.append(notification)
        self._logger.info(
            "Mock email dispatch",
            extra={"booking_id": notification.request_id, "to": notification.to, "message_length": len(notification.message)},
        )
