"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime

import pytest

from shipments.models import Shipment
from transporters.models import Transporter


@pytest.fixture
def now() -> datetime:
    # A fixed clock: mid-October, outside every seasonal window.
    return datetime(2026, 10, 18, 9, 0)


@pytest.fixture
def make_shipment(now):
    def _make(**overrides) -> Shipment:
        fields = dict(
            shipment_id="shipment-123",
            origin="Lilongwe",
            destination="Blantyre",
            weight_kg=8500,
            cargo_category="maize",
            price=420_000,
            pickup_date=datetime(2026, 10, 19, 7, 0),  # tomorrow
        )
        fields.update(overrides)
        return Shipment.new(**fields)
    return _make


@pytest.fixture
def make_transporter():
    def _make(transporter_id="transporter-1", **overrides) -> Transporter:
        fields = dict(
            verified=True,
            rating_average=4.5,
            rating_count=15,
            vehicle_capacity_kg=10_000,
            vehicle_plate="RU 1234",
            current_location="Lilongwe",
        )
        fields.update(overrides)
        return Transporter.new(transporter_id, **fields)
    return _make
