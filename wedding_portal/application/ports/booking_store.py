from abc import ABC, abstractmethod
from collections.abc import Callable

from wedding_portal.domain.entities.booking_request import BookingRequest


class BookingStorePort(ABC):
    @abstractmethod
    def get(self, booking_id: str) -> BookingRequest | None:
        raise NotImplementedError

    @abstractmethod
    def save(self, booking: BookingRequest) -> None:
        """Insert or replace the booking request with the same id."""
        raise NotImplementedError

    @abstractmethod
    def update(
        self,
        booking_id: str,
        change: Callable[[BookingRequest], BookingRequest],
    ) -> BookingRequest:
        """
        Apply change to the stored request and persist the result, holding
        the request's lock for the whole read-modify-write.
        Raises BookingNotFoundError if the id is unknown. Anything change
        raises propagates and nothing is written.
        """
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[BookingRequest]:
        raise NotImplementedError

    @abstractmethod
    def claim_action(self, booking_id: str, action: str) -> BookingRequest:
        """
        Atomically mark an integration call as in flight.
        Raises ActionInProgressError if another action is already pending,
        BookingNotFoundError if the id is unknown.
        """
        raise NotImplementedError

    @abstractmethod
    def release_action(self, booking_id: str) -> None:
        raise NotImplementedError
