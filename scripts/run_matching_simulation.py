import csv
import logging
import os
from datetime import datetime
from typing import List

from matching import batch_match_pending_shipments, group_by_notification_priority, policy_from_env
from pricing import format_price, get_seasonal_window
from routing import RouteResolver, load_distance_table
from shipments.models import Shipment
from transporters.models import Transporter

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _as_bool(value: str) -> bool:
    return str(value).strip().lower() in ("true", "1", "yes")


def load_shipments(filepath="sampledata/shipments.csv", limit=50) -> List[Shipment]:
    shipments = []
    with open(os.path.join(BASE_DIR, filepath), 'r') as file:
        reader = csv.DictReader(file)
        for count, row in enumerate(reader):
            if count >= limit: break
            shipments.append(
                Shipment.new(
                    row['shipment_id'],
                    row['origin'],
                    row['destination'],
                    float(row['weight_kg']),
                    row['cargo_category'],
                    int(row['price']),
                    datetime.fromisoformat(row['pickup_date']),
                    status=row.get('status') or "posted",
                    border_crossing_required=_as_bool(row.get('border_crossing_required', "")),
                )
            )
    return shipments


def load_transporters(filepath="sampledata/transporters.csv") -> List[Transporter]:
    transporters = []
    with open(os.path.join(BASE_DIR, filepath), 'r') as file:
        reader = csv.DictReader(file)
        for row in reader:
            legs = [tuple(leg.split(">", 1)) for leg in row['return_routes'].split("|") if ">" in leg]
            transporters.append(
                Transporter.new(
                    row['transporter_id'],
                    _as_bool(row['verified']),
                    float(row['rating_average']),
                    int(row['rating_count']),
                    float(row['vehicle_capacity_kg']),
                    row['vehicle_plate'],
                    route_experience_count=int(row['route_experience_count']),
                    return_route_history=legs,
                    current_location=row['current_location'] or None,
                    name=row['name'],
                    vehicle_type=row['vehicle_type'] or None,
                    has_refrigeration=row['vehicle_type'] == "refrigerated",
                    is_available=_as_bool(row['is_available']),
                )
            )
    return transporters


def run_simulation():
    print("=== STARTING MATCHING SIMULATION ===")
    logging.basicConfig(level=logging.WARNING)

    shipments = load_shipments(limit=30)
    transporters = load_transporters()
    print(f"Loaded {len(shipments)} Shipments and {len(transporters)} Transporters.\n")

    policy = policy_from_env()
    resolver = RouteResolver(
        distance_table=load_distance_table(os.path.join(BASE_DIR, "sampledata/city_distances.csv")),
        fallback_distance_km=policy.fallback_distance_km,
        min_return_trips=policy.min_return_trips,
    )
    now = datetime.now()

    result = batch_match_pending_shipments(shipments, transporters, now=now, resolver=resolver, policy=policy)

    by_id = {s.id: s for s in shipments}
    for shipment_id, matches in result.matches.items():
        shipment = by_id[shipment_id]
        window = get_seasonal_window(shipment.cargo_category, now.date())
        badge = f" [{window.name} x{window.multiplier:.2f}]" if window else ""
        print(
            f"Shipment {shipment_id} {shipment.origin} -> {shipment.destination} "
            f"({shipment.weight_kg:.0f} kg {shipment.cargo_category.value}) {format_price(shipment.price)}{badge}"
        )

        high, _ = group_by_notification_priority(matches, policy.high_priority_notifications)
        for rank, match in enumerate(matches, 1):
            channel = "SMS+WhatsApp" if match in high else "WhatsApp"
            flags = " BACKHAUL" if match.is_backhaul else ""
            review = " REVIEW" if match.needs_review else ""
            print(
                f"  {rank:>2}. {match.transporter_id} score={match.total_score:>3} "
                f"price={format_price(match.effective_price)} via {channel}{flags}{review}"
            )
        if not matches:
            print("  no matches found")

    print("\n=== SIMULATION COMPLETE ===")
    print(f"Shipments processed: {result.processed} (errors: {result.errors})")
    print(f"Matches created: {result.matches_created}")
    if result.rejected_transporters:
        print(f"Rejected transporter records: {', '.join(result.rejected_transporters)}")


if __name__ == "__main__":
    run_simulation()
