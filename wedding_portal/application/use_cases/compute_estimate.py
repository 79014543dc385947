from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from wedding_portal.application.utils.money import as_finite_number, round_half_up
from wedding_portal.domain.entities.booking_request import PaymentStatus
from wedding_portal.domain.entities.estimate import Estimate, EstimateLineItem, PaymentMilestone
from wedding_portal.domain.entities.pricing import PricingCatalog, PricingType
from wedding_portal.domain.entities.selections import CustomSelections

MAX_NOTES_LENGTH = 1000


def normalize_selections(
    raw: CustomSelections | Mapping[str, Any],
    catalog: PricingCatalog,
) -> tuple[CustomSelections, list[str]]:
    """
    Coerce client selections into a complete, in-range CustomSelections.

    Never raises. Every silent correction is reported in the returned
    adjustments list so callers can surface it:
    - guest count: rounded half-up and clamped to the catalog bounds; a
      non-numeric value falls back to the catalog default
    - choice: missing -> category default_value, unknown -> first option
    - price: non-numeric/NaN/infinite -> option default price, negative -> 0
    """
    if isinstance(raw, CustomSelections):
        raw_guests: Any = raw.guest_count
        raw_choices: Mapping[str, Any] = raw.choices
        raw_prices: Mapping[str, Any] = raw.prices
        raw_notes: Any = raw.notes
    else:
        raw_guests = raw.get("guest_count")
        raw_choices = raw.get("choices") or {}
        raw_prices = raw.get("prices") or {}
        raw_notes = raw.get("notes")

    adjustments: list[str] = []
    guest_count = _normalize_guest_count(raw_guests, catalog, adjustments)

    choices: dict[str, str] = {}
    prices: dict[str, float] = {}
    for category in catalog.categories:
        value = raw_choices.get(category.key)
        if value is None:
            option = category.resolve_option(category.default_value)
        else:
            option = category.find_option(value)
            if option is None:
                option = category.options[0]
                adjustments.append(
                    f"{category.label}: unknown option '{value}', using '{option.value}'"
                )
        choices[category.key] = option.value

        override = raw_prices.get(category.key)
        price = as_finite_number(override)
        if price is None:
            if override is not None:
                adjustments.append(
                    f"{category.label}: invalid price, using default {option.default_price:g}"
                )
            price = float(option.default_price)
        elif price < 0:
            adjustments.append(f"{category.label}: negative price raised to 0")
            price = 0.0
        prices[category.key] = price

    if isinstance(raw_notes, str):
        notes = raw_notes.strip()
    elif raw_notes is None:
        notes = ""
    else:
        adjustments.append("Notes ignored, not text")
        notes = ""
    if len(notes) > MAX_NOTES_LENGTH:
        adjustments.append(f"Notes truncated to {MAX_NOTES_LENGTH} characters")
        notes = notes[:MAX_NOTES_LENGTH]

    return (
        CustomSelections(guest_count=guest_count, choices=choices, prices=prices, notes=notes),
        adjustments,
    )


def _normalize_guest_count(value: Any, catalog: PricingCatalog, adjustments: list[str]) -> int:
    number = as_finite_number(value)
    if number is None:
        if value is not None:
            adjustments.append(
                f"Guest count '{value}' is not a number, using {catalog.default_guest_count}"
            )
        return catalog.default_guest_count

    rounded = round_half_up(number)
    clamped = max(catalog.min_guests, min(catalog.max_guests, rounded))
    if clamped != rounded:
        adjustments.append(f"Guest count {rounded} adjusted to {clamped}")
    return clamped


def compute_estimate(
    selections: CustomSelections | Mapping[str, Any],
    catalog: PricingCatalog,
) -> Estimate:
    """Itemize a custom plan: venue first, then one line per category in catalog order."""
    normalized, adjustments = normalize_selections(selections, catalog)
    return _itemize(normalized, adjustments, catalog)


def _itemize(normalized: CustomSelections, adjustments: list[str], catalog: PricingCatalog) -> Estimate:
    guests = normalized.guest_count

    line_items = [
        EstimateLineItem(
            vendor=catalog.venue_vendor,
            label=catalog.venue_label,
            amount=catalog.venue_fee,
        )
    ]
    for category in catalog.categories:
        option = category.resolve_option(normalized.choice_for(category.key))
        price = normalized.price_for(category.key) or 0.0
        if option.pricing_type == PricingType.per_guest:
            amount = round_half_up(price * guests)
            label = f"{option.title} ({guests} guests)"
        else:
            amount = round_half_up(price)
            label = option.title
        line_items.append(
            EstimateLineItem(
                vendor=option.vendor_override or category.vendor,
                label=label,
                amount=amount,
            )
        )

    total = sum(item.amount for item in line_items)
    return Estimate(
        line_items=tuple(line_items),
        total=total,
        deposit=round_half_up(total * catalog.deposit_rate),
        guest_count=guests,
        adjustments=tuple(adjustments),
    )


def streamlined_estimate(catalog: PricingCatalog) -> Estimate:
    package = catalog.streamlined_package
    return Estimate(
        line_items=(
            EstimateLineItem(vendor=catalog.venue_vendor, label=package.name, amount=package.price),
        ),
        total=package.price,
        deposit=round_half_up(package.price * package.deposit_rate),
    )


def payment_schedule(
    estimate: Estimate,
    payment_status: PaymentStatus,
    catalog: PricingCatalog,
) -> list[PaymentMilestone]:
    if payment_status == PaymentStatus.deposit_paid:
        deposit_status = "Paid"
    elif payment_status == PaymentStatus.deposit_processing:
        deposit_status = "Processing"
    else:
        deposit_status = "Pending"

    checkpoint = round_half_up(estimate.total * catalog.checkpoint_rate)
    return [
        PaymentMilestone(
            label="Deposit",
            amount=estimate.deposit,
            due="Within 24 hours of selecting date",
            status=deposit_status,
        ),
        PaymentMilestone(
            label="Planning checkpoint",
            amount=checkpoint,
            due="90 days prior",
            status="Scheduled",
        ),
        PaymentMilestone(
            label="Final balance",
            amount=estimate.total - estimate.deposit - checkpoint,
            due="14 days prior",
            status="Scheduled",
        ),
    ]


class ComputeEstimateUseCase:
    def __init__(self, catalog: PricingCatalog) -> None:
        self._catalog = catalog
        self._logger = logging.getLogger(__name__)

    @property
    def catalog(self) -> PricingCatalog:
        return self._catalog

    def execute(self, selections: CustomSelections | Mapping[str, Any]) -> tuple[CustomSelections, Estimate]:
        normalized, adjustments = normalize_selections(selections, self._catalog)
        estimate = _itemize(normalized, adjustments, self._catalog)
        if estimate.adjustments:
            self._logger.info(
                "Selections normalized",
                extra={"adjustments": "; ".join(estimate.adjustments)},
            )
        return normalized, estimate

    def streamlined(self) -> Estimate:
        return streamlined_estimate(self._catalog)

    def schedule(self, estimate: Estimate, payment_status: PaymentStatus) -> list[PaymentMilestone]:
        return payment_schedule(estimate, payment_status, self._catalog)
