from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PricingType(str, Enum):
    per_guest = "per_guest"
    flat = "flat"


@dataclass(frozen=True)
class ServiceOption:
    value: str
    title: str
    subtitle: str
    pricing_type: PricingType
    default_price: float
    vendor_override: str | None = None


@dataclass(frozen=True)
class ServiceCategory:
    key: str  # "food", "beverage", "cake", "floral", "coordinator", "officiant"
    label: str
    vendor: str
    options: tuple[ServiceOption, ...]
    default_value: str  # preselected when the client has not chosen yet

    def find_option(self, value: str | None) -> ServiceOption | None:
        for option in self.options:
            if option.value == value:
                return option
        return None

    def resolve_option(self, value: str | None) -> ServiceOption:
        """Return the option for value, or the first option when it is unknown."""
        return self.find_option(value) or self.options[0]


@dataclass(frozen=True)
class StreamlinedPackage:
    name: str
    headline: str
    description: str
    inclusions: tuple[str, ...]
    price: int
    deposit_rate: float = 0.25


@dataclass(frozen=True)
class PricingCatalog:
    venue_vendor: str
    venue_label: str
    venue_fee: int
    categories: tuple[ServiceCategory, ...]
    streamlined_package: StreamlinedPackage
    deposit_rate: float = 0.25
    checkpoint_rate: float = 0.35
    min_guests: int = 10
    max_guests: int = 120
    default_guest_count: int = 35

    def get_category(self, key: str) -> ServiceCategory | None:
        for category in self.categories:
            if category.key == key:
                return category
        return None
