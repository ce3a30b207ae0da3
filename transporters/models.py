"""
Purpose: Core data models for the transporters domain.
What it does:
Defines one vehicle+driver unit as seen by the matching engine, without
relying on any persistence layer. Records are read-only snapshots supplied
by the transporter directory.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Tuple

from shipments.models import InvalidRecordError

# (origin city, destination city)
RoutePair = Tuple[str, str]


class VehicleType(str, Enum):
    PICKUP = "pickup"
    CANTER = "canter"
    SMALL_TRUCK = "small_truck"
    MEDIUM_TRUCK = "medium_truck"
    LARGE_TRUCK = "large_truck"
    FLATBED = "flatbed"
    REFRIGERATED = "refrigerated"
    TANKER = "tanker"


@dataclass(frozen=True)
class Transporter:
    """
    A purely stateless representation of a transporter at a specific point in time.
    """
    id: str
    verified: bool
    rating_average: float
    rating_count: int
    vehicle_capacity_kg: float
    vehicle_plate: str

    # Trips already completed on the exact origin->destination pair of the
    # shipment being matched, as reported by the directory.
    route_experience_count: int = 0
    return_route_history: FrozenSet[RoutePair] = frozenset()

    current_location: Optional[str] = None
    available_from: Optional[datetime] = None
    booked_dates: FrozenSet[date] = frozenset()

    name: str = ""
    phone: str = ""
    vehicle_type: Optional[VehicleType] = None
    has_refrigeration: bool = False
    is_available: bool = True

    @classmethod
    def new(
        cls,
        transporter_id: str,
        verified: bool,
        rating_average: float,
        rating_count: int,
        vehicle_capacity_kg: float,
        vehicle_plate: str,
        route_experience_count: int = 0,
        return_route_history: Iterable[RoutePair] = (),
        current_location: Optional[str] = None,
        available_from: Optional[datetime] = None,
        booked_dates: Iterable[date] = (),
        name: str = "",
        phone: str = "",
        vehicle_type: str | VehicleType | None = None,
        has_refrigeration: bool = False,
        is_available: bool = True,
    ) -> Transporter:
        if isinstance(vehicle_type, str):
            vehicle_type = VehicleType(vehicle_type)

        return cls(
            id=transporter_id,
            verified=verified,
            rating_average=rating_average,
            rating_count=rating_count,
            vehicle_capacity_kg=vehicle_capacity_kg,
            vehicle_plate=vehicle_plate,
            route_experience_count=route_experience_count,
            return_route_history=frozenset(tuple(pair) for pair in return_route_history),
            current_location=current_location,
            available_from=available_from,
            booked_dates=frozenset(booked_dates),
            name=name,
            phone=phone,
            vehicle_type=vehicle_type,
            has_refrigeration=has_refrigeration,
            is_available=is_available,
        )

    def validate(self) -> None:
        """
        Boundary checks for the transporter invariants.
        """
        if math.isnan(self.rating_average) or not 0 <= self.rating_average <= 5:
            raise InvalidRecordError(f"Transporter {self.id}: rating_average must be in [0, 5]")

        if self.rating_count < 0:
            raise InvalidRecordError(f"Transporter {self.id}: rating_count must be >= 0")

        if not math.isfinite(self.vehicle_capacity_kg) or self.vehicle_capacity_kg <= 0:
            raise InvalidRecordError(f"Transporter {self.id}: vehicle_capacity_kg must be > 0")

        if self.route_experience_count < 0:
            raise InvalidRecordError(f"Transporter {self.id}: route_experience_count must be >= 0")
