from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class EmailNotification:
    request_id: str
    to: str
    subject: str
    message: str
    sent_by: str
    estimate_summary: dict[str, Any] = field(default_factory=dict)


class NotificationPort(ABC):
    @abstractmethod
    def send_email(self, notification: EmailNotification) -> None:
        raise NotImplementedError
