from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EstimateLineItem:
    vendor: str
    label: str
    amount: int


@dataclass(frozen=True)
class Estimate:
    line_items: tuple[EstimateLineItem, ...]
    total: int
    deposit: int
    guest_count: int | None = None
    # Normalizations applied to the raw selections, e.g. a clamped guest count
    adjustments: tuple[str, ...] = ()


@dataclass(frozen=True)
class PaymentMilestone:
    label: str
    amount: int
    due: str
    status: str  # "Pending", "Processing", "Paid", "Scheduled"
