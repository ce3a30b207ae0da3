from collections import Counter
from datetime import datetime

import pytest

from routing import (
    DEFAULT_FALLBACK_DISTANCE_KM,
    DistanceTable,
    RouteHistoryIndex,
    RouteResolver,
    TripRecord,
    load_distance_table,
)


class TestDistanceTable:

    def test_known_pair(self):
        assert DistanceTable().lookup("Lilongwe", "Blantyre") == 320

    def test_lookup_is_symmetric(self):
        table = DistanceTable()
        assert table.lookup("Blantyre", "Lilongwe") == table.lookup("Lilongwe", "Blantyre")

    def test_same_city_is_zero(self):
        assert DistanceTable().lookup("Zomba", "Zomba") == 0

    def test_unknown_pair_is_none(self):
        assert DistanceTable().lookup("Chitipa", "Nsanje") is None

    def test_merged_overrides(self):
        table = DistanceTable().merged({("Lilongwe", "Blantyre"): 311})
        assert table.lookup("Blantyre", "Lilongwe") == 311
        assert len(table) == len(DistanceTable())


class TestLoadDistanceTable:

    def test_csv_rows_merge_over_builtin(self, tmp_path):
        path = tmp_path / "distances.csv"
        path.write_text(
            "origin,destination,distance_km\n"
            "Balaka,Blantyre,95\n"
            "Lilongwe,Blantyre,315\n"
        )

        table = load_distance_table(path)

        assert table.lookup("Blantyre", "Balaka") == 95
        assert table.lookup("Lilongwe", "Blantyre") == 315
        assert table.lookup("Mzuzu", "Karonga") == 120

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "distances.csv"
        path.write_text("from,to,km\nA,B,1\n")

        with pytest.raises(ValueError, match="missing columns"):
            load_distance_table(path)

    def test_negative_distance(self, tmp_path):
        path = tmp_path / "distances.csv"
        path.write_text("origin,destination,distance_km\nA,B,-4\n")

        with pytest.raises(ValueError, match="Negative distance"):
            load_distance_table(path)


class TestRouteHistoryIndex:

    def test_lookback_window(self):
        now = datetime(2026, 10, 18)
        index = RouteHistoryIndex.from_trips(
            [
                TripRecord("t1", "Blantyre", "Lilongwe", 2, datetime(2026, 10, 1)),
                TripRecord("t1", "Blantyre", "Lilongwe", 5, datetime(2026, 3, 1)),  # too old
                TripRecord("t1", "Zomba", "Blantyre", 1),  # undated counts
                TripRecord("t2", "Mzuzu", "Karonga", 0),
            ],
            now=now,
        )

        assert index.trips_on("t1", ("Blantyre", "Lilongwe")) == 2
        assert index.trips_on("t1", ("Zomba", "Blantyre")) == 1
        assert index.trips_on("t2", ("Mzuzu", "Karonga")) == 0
        assert index.pairs_for("t1") == frozenset({("Blantyre", "Lilongwe"), ("Zomba", "Blantyre")})
        assert index.pairs_for("unknown") == frozenset()


class TestRouteResolver:

    def test_fallback_for_unknown_pair(self):
        resolver = RouteResolver()
        assert resolver.distance_km("Chitipa", "Nsanje") == DEFAULT_FALLBACK_DISTANCE_KM == 500

    def test_custom_fallback(self):
        assert RouteResolver(fallback_distance_km=750).distance_km("Chitipa", "Nsanje") == 750

    def test_known_return_from_transporter_record(self, make_shipment, make_transporter):
        transporter = make_transporter(return_route_history=[("Blantyre", "Lilongwe")])
        resolver = RouteResolver()

        assert resolver.is_known_return_route(transporter, make_shipment()) is True
        assert resolver.is_known_return_route(
            transporter, make_shipment(origin="Blantyre", destination="Lilongwe")
        ) is False

    def test_known_return_from_history_index(self, make_shipment, make_transporter):
        history = RouteHistoryIndex({"transporter-1": Counter({("Blantyre", "Lilongwe"): 3})})
        resolver = RouteResolver(history=history)

        assert resolver.is_known_return_route(make_transporter(), make_shipment()) is True

    def test_experience_takes_the_larger_source(self, make_shipment, make_transporter):
        history = RouteHistoryIndex({"transporter-1": Counter({("Lilongwe", "Blantyre"): 7})})
        resolver = RouteResolver(history=history)

        assert resolver.experience_on_route(make_transporter(route_experience_count=2), make_shipment()) == 7
        assert resolver.experience_on_route(make_transporter(route_experience_count=12), make_shipment()) == 12

    def test_deviation(self, make_shipment, make_transporter):
        resolver = RouteResolver()

        assert resolver.deviation_km(make_transporter(current_location="Lilongwe"), make_shipment()) == 0
        assert resolver.deviation_km(make_transporter(current_location="Salima"), make_shipment()) == 100
        assert resolver.deviation_km(make_transporter(current_location=None), make_shipment()) == 500

    def test_single_reverse_trip_is_not_a_return_route(self, make_shipment, make_transporter, now):
        one_trip = RouteHistoryIndex.from_trips(
            [TripRecord("transporter-1", "Blantyre", "Lilongwe", 1, datetime(2026, 10, 2))], now=now
        )
        two_trips = RouteHistoryIndex.from_trips(
            [
                TripRecord("transporter-1", "Blantyre", "Lilongwe", 1, datetime(2026, 9, 1)),
                TripRecord("transporter-1", "Blantyre", "Lilongwe", 1, datetime(2026, 10, 2)),
            ],
            now=now,
        )

        assert RouteResolver(history=one_trip).is_known_return_route(make_transporter(), make_shipment()) is False
        assert RouteResolver(history=two_trips).is_known_return_route(make_transporter(), make_shipment()) is True

    def test_return_trip_threshold_is_configurable(self, make_shipment, make_transporter):
        history = RouteHistoryIndex({"transporter-1": Counter({("Blantyre", "Lilongwe"): 1})})

        assert RouteResolver(history=history, min_return_trips=1).is_known_return_route(
            make_transporter(), make_shipment()
        ) is True
