from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CustomSelections:
    guest_count: int
    choices: dict[str, str] = field(default_factory=dict)  # category key -> option value
    prices: dict[str, float] = field(default_factory=dict)  # category key -> unit or flat price
    notes: str = ""

    def choice_for(self, category_key: str) -> str | None:
        return self.choices.get(category_key)

    def price_for(self, category_key: str) -> float | None:
        return self.prices.get(category_key)
