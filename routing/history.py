"""
Purpose: Per-transporter route-history index.
What it does:
Aggregates completed-trip records into counts per (origin, destination) for
each transporter, keeping only trips inside a lookback window. The route
resolver uses it to answer "has this transporter driven the reverse leg?"
and "how often have they driven this exact leg?".
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

RoutePair = Tuple[str, str]

DEFAULT_LOOKBACK_DAYS = 90

# Completed reverse trips inside the lookback window before a leg counts as a
# known return route.
DEFAULT_MIN_RETURN_TRIPS = 2


@dataclass(frozen=True)
class TripRecord:
    transporter_id: str
    origin: str
    destination: str
    completed_trips: int = 1
    last_trip_date: Optional[datetime] = None


class RouteHistoryIndex:
    """
    transporter_id -> Counter[(origin, destination)] of completed trips.
    """

    def __init__(self, counts: Optional[Dict[str, Counter]] = None):
        self._counts: Dict[str, Counter] = counts or {}

    @classmethod
    def from_trips(
        cls,
        trips: Iterable[TripRecord],
        now: datetime,
        lookback_days: int = DEFAULT_LOOKBACK_DAYS,
    ) -> RouteHistoryIndex:
        cutoff = now - timedelta(days=lookback_days)
        counts: Dict[str, Counter] = defaultdict(Counter)

        for trip in trips:
            # undated records are treated as current
            if trip.last_trip_date is not None and trip.last_trip_date < cutoff:
                continue
            if trip.completed_trips <= 0:
                continue
            counts[trip.transporter_id][(trip.origin, trip.destination)] += trip.completed_trips

        return cls(dict(counts))

    def trips_on(self, transporter_id: str, pair: RoutePair) -> int:
        return self._counts.get(transporter_id, Counter()).get(pair, 0)

    def pairs_for(self, transporter_id: str) -> FrozenSet[RoutePair]:
        return frozenset(self._counts.get(transporter_id, Counter()))
