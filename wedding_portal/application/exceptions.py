from wedding_portal.domain.entities.availability import AvailabilityStatus


class BookingNotFoundError(LookupError):
    """Raised when a booking request id is unknown to the store."""
    pass


class DateUnavailableError(ValueError):
    """Raised when the client picks a date that is not open for events."""

    def __init__(self, day, status: AvailabilityStatus) -> None:
        super().__init__(f"{day.isoformat()} is not available ({status.value})")
        self.day = day
        self.status = status


class WizardStepError(ValueError):
    """Raised when a wizard step is attempted before its prerequisites are met."""
    pass


class ActionInProgressError(RuntimeError):
    """Raised when another sync or payment call for the same booking is still running."""
    pass


class IntegrationError(RuntimeError):
    """Raised when an external provider fails (HoneyBook, Square, email)."""
    pass
