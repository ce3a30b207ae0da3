"""
Purpose: Seasonal price adjustment for Malawi's agricultural calendar.
What it does:
Maps (cargo category, calendar date) to a price multiplier using an ordered
list of seasonal windows. The first window that contains the month (and
accepts the cargo category) wins.

Default order:
  1. Harvest  (Apr-Jun)      0.90  cheaper, many idle trucks
  2. Rainy    (Dec-Mar)      1.15  premium, poor roads
  3. Planting (Nov-Dec)      1.10  premium
December appears in both rainy and planting; rainy is listed first, so
planting only applies in November.

Rule: Pure functions. The date is always passed in, never read from a clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import FrozenSet, Optional, Sequence

from shipments.models import CargoCategory


@dataclass(frozen=True)
class SeasonalWindow:
    name: str
    months: FrozenSet[int]
    multiplier: float
    # None means the window applies to every cargo category
    cargo_categories: Optional[FrozenSet[CargoCategory]] = None

    def applies(self, cargo_category: CargoCategory, on_date: date) -> bool:
        if on_date.month not in self.months:
            return False
        return self.cargo_categories is None or cargo_category in self.cargo_categories


DEFAULT_SEASONAL_WINDOWS: Sequence[SeasonalWindow] = (
    SeasonalWindow("harvest", frozenset({4, 5, 6}), 0.90),
    SeasonalWindow("rainy", frozenset({12, 1, 2, 3}), 1.15),
    SeasonalWindow("planting", frozenset({11, 12}), 1.10),
)

NEUTRAL_MULTIPLIER = 1.00


def get_seasonal_window(
    cargo_category: CargoCategory,
    on_date: date,
    windows: Sequence[SeasonalWindow] = DEFAULT_SEASONAL_WINDOWS,
) -> Optional[SeasonalWindow]:
    """
    The window that sets the price on `on_date`, or None in the off season.
    Lets UIs show a "seasonal premium" badge without running a full match.
    """
    for window in windows:
        if window.applies(cargo_category, on_date):
            return window
    return None


def get_seasonal_multiplier(
    cargo_category: CargoCategory,
    on_date: date,
    windows: Sequence[SeasonalWindow] = DEFAULT_SEASONAL_WINDOWS,
) -> float:
    window = get_seasonal_window(cargo_category, on_date, windows)
    return window.multiplier if window else NEUTRAL_MULTIPLIER


def round_half_up(value: float) -> int:
    """Nearest integer with halves rounded away from zero (12.5 -> 13)."""
    # trim float noise (11.499999999999998) first
    value = round(value, 9)
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def effective_price(
    base_price: int,
    cargo_category: CargoCategory,
    on_date: date,
    windows: Sequence[SeasonalWindow] = DEFAULT_SEASONAL_WINDOWS,
) -> int:
    return round_half_up(base_price * get_seasonal_multiplier(cargo_category, on_date, windows))
