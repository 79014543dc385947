from enum import Enum


class AvailabilityStatus(str, Enum):
    available = "available"
    hold = "hold"
    booked = "booked"
    unavailable = "unavailable"
    past = "past"
