"""Display helpers for money amounts."""

from .seasonal import round_half_up

DEFAULT_CURRENCY = "MWK"


def format_price(amount: float, currency: str = DEFAULT_CURRENCY) -> str:
    """
    Currency code plus thousands separators, no minor units.
    Halves round up, like every other price in the system.

    >>> format_price(1250000)
    'MWK 1,250,000'
    """
    rounded = round_half_up(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{currency} {abs(rounded):,}"
