from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Any


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2316.5 -> 2317)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def as_finite_number(value: Any) -> float | None:
    """
    Return value as a float, or None if it is not a finite real number.
    Numeric strings from form fields ("40", " 62.5 ") are accepted.
    """
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    elif isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        return None
    else:
        number = float(value)
    if math.isnan(number) or math.isinf(number):
        return None
    return number
