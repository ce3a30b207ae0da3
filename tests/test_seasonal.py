from datetime import date

import pytest

from pricing import (
    DEFAULT_SEASONAL_WINDOWS,
    SeasonalWindow,
    effective_price,
    format_price,
    get_seasonal_multiplier,
    get_seasonal_window,
)
from pricing.seasonal import round_half_up
from shipments.models import CargoCategory

MAIZE = CargoCategory.MAIZE


@pytest.mark.parametrize(
    "month, expected",
    [
        (1, 1.15), (2, 1.15), (3, 1.15),
        (4, 0.90), (5, 0.90), (6, 0.90),
        (7, 1.00), (8, 1.00), (9, 1.00), (10, 1.00),
        (11, 1.10),
        (12, 1.15),  # rainy is listed before planting
    ],
)
def test_multiplier_by_month(month, expected):
    assert get_seasonal_multiplier(MAIZE, date(2026, month, 15)) == expected


def test_window_names():
    assert get_seasonal_window(MAIZE, date(2026, 5, 1)).name == "harvest"
    assert get_seasonal_window(MAIZE, date(2026, 1, 1)).name == "rainy"
    assert get_seasonal_window(MAIZE, date(2026, 11, 1)).name == "planting"
    assert get_seasonal_window(MAIZE, date(2026, 8, 1)) is None


def test_multiplier_is_the_same_for_every_cargo_by_default():
    on = date(2026, 5, 20)
    assert {get_seasonal_multiplier(c, on) for c in CargoCategory} == {0.90}


def test_cargo_restricted_window():
    windows = (
        SeasonalWindow("tobacco_auction", frozenset({4}), 1.20, frozenset({CargoCategory.TOBACCO})),
    ) + tuple(DEFAULT_SEASONAL_WINDOWS)

    assert get_seasonal_multiplier(CargoCategory.TOBACCO, date(2026, 4, 3), windows) == 1.20
    assert get_seasonal_multiplier(MAIZE, date(2026, 4, 3), windows) == 0.90


class TestEffectivePrice:

    def test_harvest_discount(self):
        assert effective_price(50_000, MAIZE, date(2026, 5, 1)) == 45_000

    def test_rainy_premium(self):
        assert effective_price(420_000, MAIZE, date(2026, 2, 1)) == 483_000

    def test_off_season_unchanged(self):
        assert effective_price(420_000, MAIZE, date(2026, 9, 1)) == 420_000

    def test_rounds_half_up(self):
        # 15 * 1.10 = 16.5
        assert effective_price(15, MAIZE, date(2026, 11, 1)) == 17


def test_round_half_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(13.5) == 14
    assert round_half_up(12.49) == 12
    assert round_half_up(-2.5) == -3
    assert round_half_up(0.1 + 0.2 + 11.2) == 12  # 11.5 with float noise


def test_format_price():
    assert format_price(1_250_000) == "MWK 1,250,000"
    assert format_price(500) == "MWK 500"
    assert format_price(-4_000) == "-MWK 4,000"
    assert format_price(45_000, currency="MK") == "MK 45,000"


def test_format_price_rounds_half_up():
    assert format_price(2.5) == "MWK 3"
    assert format_price(1_249_999.5) == "MWK 1,250,000"
    assert format_price(-2.5) == "-MWK 3"
    assert format_price(0.4) == "MWK 0"
