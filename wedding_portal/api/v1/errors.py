from fastapi import HTTPException

from wedding_portal.application.exceptions import (
    ActionInProgressError,
    BookingNotFoundError,
    DateUnavailableError,
    IntegrationError,
    WizardStepError,
)

HANDLED_ERRORS = (BookingNotFoundError, ActionInProgressError, IntegrationError, ValueError)


def to_http_error(error: Exception) -> HTTPException:
    if isinstance(error, BookingNotFoundError):
        return HTTPException(status_code=404, detail=f"Booking request {error} not found")
    if isinstance(error, DateUnavailableError):
        return HTTPException(
            status_code=409,
            detail={"message": str(error), "status": error.status.value},
        )
    if isinstance(error, (WizardStepError, ActionInProgressError)):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, IntegrationError):
        return HTTPException(status_code=502, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))
