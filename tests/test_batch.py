import logging
from datetime import datetime, timezone

import pytest

from matching.batch import batch_match_pending_shipments
from shipments.models import InvalidRecordError


def test_counts_and_results(make_shipment, make_transporter, now):
    shipments = [
        make_shipment(shipment_id="s1"),
        make_shipment(shipment_id="s2", origin="Mzuzu", destination="Karonga", weight_kg=2_000),
    ]
    transporters = [
        make_transporter("t1", return_route_history=[("Blantyre", "Lilongwe")]),
        make_transporter("t2", current_location="Mzuzu", vehicle_capacity_kg=2_500),
    ]

    result = batch_match_pending_shipments(shipments, transporters, now=now)

    assert result.processed == 2
    assert result.errors == 0
    assert result.matches["s1"][0].transporter_id == "t1"
    assert result.matches["s2"][0].transporter_id == "t2"
    assert result.matches_created == sum(len(m) for m in result.matches.values())


def test_non_posted_shipments_are_skipped(make_shipment, make_transporter, now):
    shipments = [make_shipment(shipment_id="done", status="delivered")]

    result = batch_match_pending_shipments(shipments, [make_transporter()], now=now)

    assert result.processed == 0
    assert result.matches == {}


def test_invalid_shipment_is_logged_and_counted(make_shipment, make_transporter, now, caplog):
    shipments = [
        make_shipment(shipment_id="bad", weight_kg=0),
        make_shipment(shipment_id="good"),
    ]

    with caplog.at_level(logging.ERROR, logger="matching.batch"):
        result = batch_match_pending_shipments(shipments, [make_transporter()], now=now)

    assert result.errors == 1
    assert result.processed == 1
    assert "good" in result.matches
    assert "bad" in caplog.text


def test_invalid_transporters_are_rejected(make_shipment, make_transporter, now):
    transporters = [
        make_transporter("broken", vehicle_capacity_kg=0),
        make_transporter("rated-too-high", rating_average=7.5),
        make_transporter("ok"),
    ]

    result = batch_match_pending_shipments([make_shipment()], transporters, now=now)

    assert result.rejected_transporters == ["broken", "rated-too-high"]
    assert [m.transporter_id for m in result.matches["shipment-123"]] == ["ok"]


def test_ineligible_transporters_are_never_ranked(make_shipment, make_transporter, now):
    transporters = [make_transporter("offline", is_available=False), make_transporter("tanker", vehicle_type="tanker")]

    result = batch_match_pending_shipments([make_shipment()], transporters, now=now)

    assert result.matches["shipment-123"] == []
    assert result.processed == 1


def test_mixed_timezone_dates_fail_only_that_shipment(make_shipment, make_transporter, now):
    shipments = [
        make_shipment(
            shipment_id="mixed-tz",
            pickup_date=datetime(2026, 10, 19, 7, 0, tzinfo=timezone.utc),
            created_at=datetime(2026, 10, 17, 12, 0),
        ),
        make_shipment(shipment_id="good"),
    ]

    result = batch_match_pending_shipments(shipments, [make_transporter()], now=now)

    assert result.errors == 1
    assert list(result.matches) == ["good"]


def test_shipment_validation_rejects_mixed_timezones(make_shipment):
    shipment = make_shipment(
        pickup_date=datetime(2026, 10, 19, 7, 0, tzinfo=timezone.utc),
        created_at=datetime(2026, 10, 17, 12, 0),
    )

    with pytest.raises(InvalidRecordError, match="timezone"):
        shipment.validate()

    make_shipment(
        pickup_date=datetime(2026, 10, 19, 7, 0, tzinfo=timezone.utc),
        created_at=datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc),
    ).validate()
