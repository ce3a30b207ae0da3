"""
Purpose: Resolve route facts for a (transporter, shipment) pair.
What it does:
- distance_km(origin, destination): road distance from the city-pair table,
  with a conservative fallback when the pair is unknown.
- is_known_return_route: the transporter has driven the reverse of this
  shipment's leg (listed on their record, or at least min_return_trips times
  in the history index), so the shipment is a natural backhaul for them.
- experience_on_route: completed trips on the same-direction leg.
- deviation_km: how far the transporter is from the shipment origin.

No I/O happens here. Tables and history are injected by the caller.
"""

from __future__ import annotations

import logging
from typing import Optional

from shipments.models import Shipment
from transporters.models import Transporter
from .distances import DEFAULT_FALLBACK_DISTANCE_KM, DistanceTable
from .history import DEFAULT_MIN_RETURN_TRIPS, RouteHistoryIndex

logger = logging.getLogger(__name__)


class RouteResolver:

    def __init__(
        self,
        distance_table: Optional[DistanceTable] = None,
        history: Optional[RouteHistoryIndex] = None,
        fallback_distance_km: float = DEFAULT_FALLBACK_DISTANCE_KM,
        min_return_trips: int = DEFAULT_MIN_RETURN_TRIPS,
    ):
        self.distance_table = distance_table or DistanceTable()
        self.history = history or RouteHistoryIndex()
        self.fallback_distance_km = fallback_distance_km
        self.min_return_trips = min_return_trips

    def distance_km(self, origin: str, destination: str) -> float:
        distance = self.distance_table.lookup(origin, destination)
        if distance is None:
            logger.warning(
                "No road distance for %s->%s, using fallback %.0f km",
                origin, destination, self.fallback_distance_km,
            )
            return self.fallback_distance_km
        return distance

    def is_known_return_route(self, transporter: Transporter, shipment: Shipment) -> bool:
        reverse = (shipment.destination, shipment.origin)
        if reverse in transporter.return_route_history:
            return True
        return self.history.trips_on(transporter.id, reverse) >= self.min_return_trips

    def experience_on_route(self, transporter: Transporter, shipment: Shipment) -> int:
        from_index = self.history.trips_on(transporter.id, shipment.route)
        return max(transporter.route_experience_count, from_index)

    def deviation_km(self, transporter: Transporter, shipment: Shipment) -> float:
        """
        Distance from the transporter's current position to the pickup city.
        Unknown position is treated like an unknown pair.
        """
        if not transporter.current_location:
            return self.fallback_distance_km
        return self.distance_km(transporter.current_location, shipment.origin)
