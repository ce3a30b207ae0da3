"""
Pricing package.

Public API:
- get_seasonal_multiplier / get_seasonal_window: seasonal price adjustment
- effective_price: base price x seasonal multiplier, rounded
- format_price: display helper ("MWK 50,000")
"""

from .formatting import format_price
from .seasonal import (
    DEFAULT_SEASONAL_WINDOWS,
    SeasonalWindow,
    effective_price,
    get_seasonal_multiplier,
    get_seasonal_window,
)

__all__ = [
    "DEFAULT_SEASONAL_WINDOWS",
    "SeasonalWindow",
    "effective_price",
    "get_seasonal_multiplier",
    "get_seasonal_window",
    "format_price",
]
